"""
Test suite for accounts module

Tests deposit and withdrawal rules, account-number validation, rendering,
and Decimal amount handling.
"""

import logging
from decimal import Decimal

import pytest

from bank_management.accounts import (
    Account, is_valid_account_number, parse_account_number, validate_account_number
)
from bank_management.amounts import to_amount, require_positive
from bank_management.customers import Customer
from bank_management.exceptions import InvalidAccountNumberError, InvalidAmountError


@pytest.fixture
def account():
    return Account(
        account_number=1234567890123,
        customer=Customer("Asha", "12 Oak St", "9876543210"),
        balance=Decimal('500.00')
    )


class TestAmounts:
    """Test Decimal amount conversion"""

    def test_rounds_to_cents(self):
        assert to_amount("100.555") == Decimal('100.56')
        assert to_amount("100.554") == Decimal('100.55')
        assert to_amount(Decimal('7')) == Decimal('7.00')

    def test_float_uses_shortest_repr(self):
        """Floats convert through their decimal string, not binary expansion"""
        assert to_amount(0.1) == Decimal('0.10')
        assert to_amount(500.0) == Decimal('500.00')

    def test_int_and_padded_string(self):
        assert to_amount(650) == Decimal('650.00')
        assert to_amount("  12.5 ") == Decimal('12.50')

    @pytest.mark.parametrize("value", ["", "abc", "NaN", "Infinity", "1e999999999", True])
    def test_invalid_amounts(self, value):
        with pytest.raises(InvalidAmountError):
            to_amount(value)

    def test_require_positive(self):
        assert require_positive("0.01") == Decimal('0.01')
        with pytest.raises(InvalidAmountError, match="positive"):
            require_positive(0)
        with pytest.raises(InvalidAmountError, match="positive"):
            require_positive("-5")


class TestAccountNumber:
    """Test account number format"""

    @pytest.mark.parametrize("number", [1000000000000, 1234567890123, 9999999999999])
    def test_valid_numbers(self, number):
        assert is_valid_account_number(number)
        assert validate_account_number(number) == number

    @pytest.mark.parametrize("number", [
        123,
        999999999999,       # 12 digits
        10000000000000,     # 14 digits
        -1234567890123,     # negative
        0,
        "1234567890123",    # not an int
        True,
    ])
    def test_invalid_numbers(self, number):
        assert not is_valid_account_number(number)
        with pytest.raises(InvalidAccountNumberError, match="exactly 13 digits"):
            validate_account_number(number)


class TestParseAccountNumber:
    """Test reading account numbers from text"""

    def test_plain_digits(self):
        assert parse_account_number("1234567890123") == 1234567890123
        assert parse_account_number(" 1234567890123\n") == 1234567890123

    def test_leading_zeros_parse_to_short_number(self):
        """Zero padding does not make a number 13 digits long"""
        number = parse_account_number("0000000000123")
        assert number == 123
        assert not is_valid_account_number(number)

    @pytest.mark.parametrize("text", [
        "+1234567890123", "-1234567890123", "123_4567890123", "1234567890123.0",
        "\u0661\u0662\u0663", "twelve", "",
    ])
    def test_rejects_non_digit_text(self, text):
        with pytest.raises(InvalidAccountNumberError, match="whole number"):
            parse_account_number(text)


class TestAccount:
    """Test Account balance operations"""

    def test_initial_balance_is_decimal(self):
        account = Account(1234567890123, Customer("A", "B", "9876543210"), 500.0)
        assert account.balance == Decimal('500.00')
        assert isinstance(account.balance, Decimal)

    def test_default_balance(self):
        account = Account(1234567890123, Customer("A", "B", "9876543210"))
        assert account.balance == Decimal('0.00')

    def test_deposit(self, account):
        assert account.deposit(Decimal('150.00'))
        assert account.balance == Decimal('650.00')

    @pytest.mark.parametrize("amount", [0, "-10", Decimal('-0.01')])
    def test_deposit_rejects_non_positive(self, account, amount, caplog):
        """Zero and negative deposits are refused and leave the balance alone"""
        assert not account.deposit(amount)
        assert account.balance == Decimal('500.00')
        assert "Deposit rejected" in caplog.text

    def test_deposit_rejects_garbage(self, account):
        assert not account.deposit("lots")
        assert account.balance == Decimal('500.00')

    def test_withdraw(self, account):
        assert account.withdraw(Decimal('200'))
        assert account.balance == Decimal('300.00')

    def test_withdraw_entire_balance(self, account):
        assert account.withdraw(Decimal('500.00'))
        assert account.balance == Decimal('0.00')

    def test_withdraw_insufficient_funds(self, account, caplog):
        """Overdrawing fails and the balance stays the same"""
        assert not account.withdraw(Decimal('500.01'))
        assert account.balance == Decimal('500.00')
        assert "Insufficient funds" in caplog.text

    @pytest.mark.parametrize("amount", [0, -50])
    def test_withdraw_rejects_non_positive(self, account, amount):
        assert not account.withdraw(amount)
        assert account.balance == Decimal('500.00')

    def test_worked_example(self, account):
        """500 -> deposit 150 -> failed 700 withdrawal -> withdraw 650"""
        assert account.deposit(150.0)
        assert account.balance == Decimal('650.00')

        assert not account.withdraw(700.0)
        assert account.balance == Decimal('650.00')

        assert account.withdraw(650.0)
        assert account.balance == Decimal('0.00')

    def test_operations_are_logged_with_account_number(self, account, caplog):
        caplog.set_level(logging.DEBUG, logger="bank_management")

        account.deposit(10)

        record = caplog.records[-1]
        assert record.action == "deposit"
        assert record.account_number == 1234567890123
        assert record.extra == {"balance": "510.00"}

    def test_render(self, account):
        assert account.render() == (
            "Account Number: 1234567890123\n"
            "Customer Name: Asha\n"
            "Customer Address: 12 Oak St\n"
            "Customer Contact: 9876543210\n"
            "Balance: 500.00"
        )
        assert str(account) == account.render()

