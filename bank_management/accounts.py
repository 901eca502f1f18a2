"""
Account Management Module

Bank account records holding a customer and a Decimal balance, with the
deposit and withdrawal rules and the account-number format check.
"""

from decimal import Decimal
from dataclasses import dataclass
import logging
import re

from .amounts import AmountLike, to_amount, require_positive
from .customers import Customer
from .exceptions import (
    InvalidAccountNumberError, InvalidAmountError, InsufficientFundsError
)
from .logging_config import log_action

logger = logging.getLogger(__name__)

ACCOUNT_NUMBER_DIGITS = 13

DIGITS = re.compile(r'[0-9]+')


def is_valid_account_number(account_number: int) -> bool:
    """Check that an account number is a non-negative integer of exactly 13 digits"""
    if isinstance(account_number, bool) or not isinstance(account_number, int):
        return False
    return 10 ** (ACCOUNT_NUMBER_DIGITS - 1) <= account_number < 10 ** ACCOUNT_NUMBER_DIGITS


def parse_account_number(text: str) -> int:
    """
    Parse account number text made only of ASCII digits

    Signs, underscores and non-ASCII digits accepted by int() are refused.

    Raises:
        InvalidAccountNumberError: If the text is not a plain digit string
    """
    text = text.strip()
    if not DIGITS.fullmatch(text):
        raise InvalidAccountNumberError("Account number must be a whole number.")
    return int(text)


def validate_account_number(account_number: int) -> int:
    """
    Validate an account number

    Raises:
        InvalidAccountNumberError: If the number is not 13 digits long
    """
    if not is_valid_account_number(account_number):
        raise InvalidAccountNumberError("Account number must have exactly 13 digits.")
    return account_number


@dataclass
class Account:
    """
    Bank account owned by a single customer

    The customer is the bank's canonical record for that name, shared by
    every account the customer holds.
    """
    account_number: int
    customer: Customer
    balance: Decimal = Decimal('0.00')

    def __post_init__(self):
        self.balance = to_amount(self.balance)

    def deposit(self, amount: AmountLike) -> bool:
        """
        Add funds to the account

        Returns:
            True if deposited, False if the amount is not positive
        """
        try:
            value = require_positive(amount)
        except InvalidAmountError as e:
            log_action(logger, "warning", f"Deposit rejected: {e}",
                       action="deposit", account_number=self.account_number)
            return False

        self.balance += value
        log_action(logger, "debug", f"Deposited {value}",
                   action="deposit", account_number=self.account_number,
                   extra={"balance": str(self.balance)})
        return True

    def withdraw(self, amount: AmountLike) -> bool:
        """
        Remove funds from the account

        Returns:
            True if withdrawn, False if the amount is not positive or exceeds
            the balance (balance unchanged)
        """
        try:
            value = require_positive(amount)
            self._check_funds(value)
        except (InvalidAmountError, InsufficientFundsError) as e:
            log_action(logger, "warning", f"Withdrawal rejected: {e}",
                       action="withdraw", account_number=self.account_number)
            return False

        self.balance -= value
        log_action(logger, "debug", f"Withdrew {value}",
                   action="withdraw", account_number=self.account_number,
                   extra={"balance": str(self.balance)})
        return True

    def _check_funds(self, amount: Decimal) -> None:
        if amount > self.balance:
            raise InsufficientFundsError(
                f"Insufficient funds: balance {self.balance}, requested {amount}"
            )

    def render(self) -> str:
        """Full display of the account and its customer"""
        return (
            f"Account Number: {self.account_number}\n"
            f"Customer Name: {self.customer.name}\n"
            f"Customer Address: {self.customer.address}\n"
            f"Customer Contact: {self.customer.contact}\n"
            f"Balance: {self.balance}"
        )

    def __str__(self) -> str:
        return self.render()
