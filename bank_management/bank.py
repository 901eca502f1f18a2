"""
Bank Store Module

The Bank owns every customer and account, applies the opening rules, and
loads/saves its whole state through a storage backend. Failures are logged
and reported as None/False results; exceptions stay inside this module.
"""

from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union
import logging

from .accounts import Account, validate_account_number
from .amounts import AmountLike, to_amount
from .config import BankConfig, get_config
from .customers import Customer, normalize_customer, validate_contact
from .exceptions import (
    AccountNotFoundError, DuplicateAccountError, InvalidAmountError,
    StorageError, ValidationError
)
from .logging_config import log_action
from .storage import StorageInterface, TextFileStorage

logger = logging.getLogger(__name__)


class Bank:
    """
    In-memory store of customers and accounts

    State is loaded from storage on construction and written back by
    close(), which also runs when the bank is used as a context manager.
    """

    def __init__(
        self,
        config: Optional[BankConfig] = None,
        storage: Optional[StorageInterface] = None
    ):
        self.config = config or get_config()
        self.storage = storage or TextFileStorage(self.config.storage_path)
        self._customers: List[Customer] = []
        self._accounts: List[Account] = []
        self._closed = False
        # Set when existing data could not be read, so shutdown does not
        # overwrite it with an empty store
        self._load_failed = False

        self.load_from_file()

    def __enter__(self) -> "Bank":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def customers(self) -> Tuple[Customer, ...]:
        """Customers in insertion order"""
        return tuple(self._customers)

    @property
    def accounts(self) -> Tuple[Account, ...]:
        """Accounts in insertion order"""
        return tuple(self._accounts)

    def open_account(
        self,
        account_number: int,
        customer: Customer,
        initial_balance: AmountLike = Decimal('0')
    ) -> Optional[Account]:
        """
        Open a new account

        Customer fields are trimmed and must each be a single line. A customer
        whose name is already known is reused as stored; otherwise the
        contact is validated and the customer is added.

        Args:
            account_number: 13-digit account number, unique in the bank
            customer: Account owner
            initial_balance: Opening balance, zero or more

        Returns:
            Created Account, or None if validation failed (nothing changed)
        """
        try:
            validate_account_number(account_number)
            if self.find_account(account_number) is not None:
                raise DuplicateAccountError(
                    f"Account number {account_number} is already in use."
                )
            balance = to_amount(initial_balance)
            if balance < 0:
                raise InvalidAmountError("Initial balance cannot be negative.")

            customer = normalize_customer(customer)
            owner = self.find_customer(customer.name)
            if owner is None:
                validate_contact(customer.contact)
                owner = customer
                self._customers.append(owner)
            elif owner != customer:
                log_action(logger, "warning",
                           f"Customer {customer.name} already exists; using stored details",
                           action="open_account", account_number=account_number)
        except ValidationError as e:
            log_action(logger, "error", str(e), action="open_account",
                       account_number=account_number if isinstance(account_number, int) else None)
            return None

        account = Account(account_number=account_number, customer=owner, balance=balance)
        self._accounts.append(account)
        log_action(logger, "debug", f"Opened account for {owner.name}",
                   action="open_account", account_number=account_number,
                   extra={"customer": owner.name, "balance": str(balance)})
        return account

    def find_account(self, account_number: int) -> Optional[Account]:
        """Find the first account with the given number"""
        for account in self._accounts:
            if account.account_number == account_number:
                return account
        return None

    def find_customer(self, name: str) -> Optional[Customer]:
        """Find a customer by exact name"""
        for customer in self._customers:
            if customer.name == name:
                return customer
        return None

    def get_account(self, account_number: int) -> Account:
        """
        Get an account that must exist

        Raises:
            AccountNotFoundError: If no account has this number
        """
        account = self.find_account(account_number)
        if account is None:
            raise AccountNotFoundError(f"Account {account_number} not found.")
        return account

    def deposit(self, account_number: int, amount: AmountLike) -> Optional[Account]:
        """Deposit into an account; returns the account, or None on failure"""
        try:
            account = self.get_account(account_number)
        except AccountNotFoundError as e:
            log_action(logger, "warning", str(e), action="deposit", account_number=account_number)
            return None
        return account if account.deposit(amount) else None

    def withdraw(self, account_number: int, amount: AmountLike) -> bool:
        """Withdraw from an account; False if missing or the withdrawal failed"""
        try:
            account = self.get_account(account_number)
        except AccountNotFoundError as e:
            log_action(logger, "warning", str(e), action="withdraw", account_number=account_number)
            return False
        return account.withdraw(amount)

    def get_balance(self, account_number: int) -> Optional[Decimal]:
        """Balance of an account, or None if it does not exist"""
        account = self.find_account(account_number)
        return account.balance if account is not None else None

    def save_to_file(self, path: Optional[Union[str, Path]] = None) -> bool:
        """
        Write every account to storage

        Args:
            path: Destination file; the configured storage is used if omitted

        Returns:
            True if written, False if the write failed
        """
        storage = TextFileStorage(path) if path is not None else self.storage
        try:
            storage.save_all([self._account_to_dict(a) for a in self._accounts])
        except StorageError as e:
            log_action(logger, "error",
                       f"Unable to save account details: {e}",
                       action="save", extra={"location": storage.location})
            return False

        log_action(logger, "info", f"Account details saved to {storage.location}",
                   action="save", extra={"accounts": len(self._accounts)})
        return True

    def load_from_file(self, path: Optional[Union[str, Path]] = None) -> int:
        """
        Replace the in-memory state with the stored accounts

        Missing or unreadable data is not an error; the current state is kept
        (empty when called from the constructor).

        Returns:
            Number of accounts loaded
        """
        storage = TextFileStorage(path) if path is not None else self.storage

        try:
            records = storage.load_all()
        except StorageError as e:
            if storage is self.storage:
                self._load_failed = True
            log_action(logger, "error",
                       f"Could not read account data from {storage.location}: {e}. {self._fallback_notice()}",
                       action="load")
            return 0

        if records is None:
            log_action(logger, "info",
                       f"No previous account data found. {self._fallback_notice()}",
                       action="load", extra={"location": storage.location})
            return 0

        self._customers = []
        self._accounts = []
        for record in records:
            self._accounts.append(self._account_from_dict(record))

        if storage is self.storage:
            self._load_failed = False
        log_action(logger, "info",
                   f"Loaded {len(self._accounts)} accounts from {storage.location}",
                   action="load")
        return len(self._accounts)

    def _fallback_notice(self) -> str:
        if self._accounts:
            return "Keeping the current accounts."
        return "Starting with an empty bank."

    def close(self) -> None:
        """Persist state to the configured storage; later calls do nothing"""
        if self._closed:
            return
        self._closed = True

        if not self.config.autosave_on_exit:
            return
        if self._load_failed:
            log_action(logger, "warning",
                       f"Not saving to {self.storage.location}: existing data could not be read",
                       action="save")
            return
        self.save_to_file()

    def _account_to_dict(self, account: Account) -> Dict[str, Any]:
        """Convert Account to a storage record"""
        return {
            "name": account.customer.name,
            "address": account.customer.address,
            "contact": account.customer.contact,
            "account_number": account.account_number,
            "balance": account.balance,
        }

    def _account_from_dict(self, data: Dict[str, Any]) -> Account:
        """Convert a storage record to an Account sharing the canonical customer"""
        customer = Customer(
            name=data["name"],
            address=data["address"],
            contact=data["contact"]
        )
        owner = self.find_customer(customer.name)
        if owner is None:
            owner = customer
            self._customers.append(owner)
        elif owner != customer:
            log_action(logger, "warning",
                       f"Stored details for customer {customer.name} differ between accounts; "
                       "keeping the first",
                       action="load", account_number=data["account_number"])

        return Account(
            account_number=data["account_number"],
            customer=owner,
            balance=data["balance"]
        )
