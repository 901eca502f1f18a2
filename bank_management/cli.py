"""
Interactive console for the bank.

Line-oriented menu over standard input/output. Store diagnostics arrive
through logging, so the console only prints prompts and results.
"""

from decimal import Decimal
from typing import Callable, Optional
import sys

from .accounts import DIGITS, parse_account_number
from .amounts import to_amount
from .bank import Bank
from .config import get_config
from .customers import Customer
from .exceptions import InvalidAccountNumberError, InvalidAmountError
from .logging_config import setup_logging

MENU = (
    "1. Open Account\n"
    "2. Perform Transactions\n"
    "3. Save Account Details\n"
    "4. Check Balance\n"
    "5. Exit"
)

TRANSACTION_MENU = "1. Deposit\n2. Withdraw"


class EndOfInput(Exception):
    """Standard input was closed"""


class BankConsole:
    """Menu loop driving a Bank"""

    def __init__(self, bank: Bank, input_func: Optional[Callable[[str], str]] = None):
        self.bank = bank
        self._input = input_func or input

    def run(self) -> int:
        """Run until the user exits or input ends; returns the exit status"""
        handlers = {
            1: self.open_account,
            2: self.transact,
            3: self.save,
            4: self.check_balance,
        }

        while True:
            print(MENU)
            try:
                choice = self._read_int("")
                if choice == 5:
                    break
                handler = handlers.get(choice)
                if handler is None:
                    print("Invalid choice. Please try again.")
                    continue
                handler()
            except EndOfInput:
                break

        print("Exiting...")
        self.bank.close()
        return 0

    def open_account(self) -> None:
        name = self._read("Enter Customer Name: ")
        address = self._read("Enter Customer Address: ")
        contact = self._read("Enter Customer Contact: ")
        account_number = self._read_account_number()
        if account_number is None:
            return
        amount = self._read_amount("Enter Initial Balance: ")
        if amount is None:
            return

        account = self.bank.open_account(account_number, Customer(name, address, contact), amount)
        if account is not None:
            print("Account opened successfully.")

    def transact(self) -> None:
        account_number = self._read_account_number()
        if account_number is None:
            return
        if self.bank.find_account(account_number) is None:
            print("Account not found.")
            return

        print(TRANSACTION_MENU)
        choice = self._read_int("")
        if choice == 1:
            amount = self._read_amount("Enter Deposit Amount: ")
            if amount is None:
                return
            account = self.bank.deposit(account_number, amount)
            if account is not None:
                print(f"Amount deposited successfully. Current Balance: {account.balance}")
        elif choice == 2:
            amount = self._read_amount("Enter Withdrawal Amount: ")
            if amount is None:
                return
            if self.bank.withdraw(account_number, amount):
                balance = self.bank.get_balance(account_number)
                print(f"Amount withdrawn successfully. Current Balance: {balance}")
            else:
                print("Cannot withdraw.")
        else:
            print("Invalid transaction choice.")

    def save(self) -> None:
        filename = self._read("Enter the filename to save account details: ").strip()
        if not filename:
            print("Error: A filename is required.")
            return
        self.bank.save_to_file(filename)

    def check_balance(self) -> None:
        account_number = self._read_account_number()
        if account_number is None:
            return
        balance = self.bank.get_balance(account_number)
        if balance is None:
            print("Account not found.")
        else:
            print(f"Account Balance: {balance}")

    def _read(self, prompt: str) -> str:
        try:
            return self._input(prompt)
        except EOFError:
            raise EndOfInput() from None

    def _read_int(self, prompt: str) -> Optional[int]:
        text = self._read(prompt).strip()
        return int(text) if DIGITS.fullmatch(text) else None

    def _read_account_number(self) -> Optional[int]:
        try:
            return parse_account_number(self._read("Enter Account Number: "))
        except InvalidAccountNumberError as e:
            print(f"Error: {e}")
            return None

    def _read_amount(self, prompt: str) -> Optional[Decimal]:
        try:
            return to_amount(self._read(prompt))
        except InvalidAmountError as e:
            print(f"Error: {e}")
            return None


def main() -> int:
    """Console entry point"""
    config = get_config()
    setup_logging(level=config.log_level, log_format=config.log_format)

    bank = Bank(config)
    try:
        return BankConsole(bank).run()
    except KeyboardInterrupt:
        print("\nExiting...")
        return 0
    finally:
        bank.close()


if __name__ == "__main__":
    sys.exit(main())
