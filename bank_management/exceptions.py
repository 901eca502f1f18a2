"""
Error types raised by validators and the storage codec.

The Bank facade catches these at its boundary and reports them, so callers of
the store see Optional/bool results instead.
"""

from typing import Optional


class BankError(Exception):
    """Base class for all bank management errors"""


class ValidationError(BankError, ValueError):
    """Input rejected before any state was changed"""


class InvalidAccountNumberError(ValidationError):
    """Account number is not a 13-digit non-negative integer"""


class InvalidContactError(ValidationError):
    """Customer contact is not 10 digits starting with 6, 7, 8 or 9"""


class InvalidCustomerError(ValidationError):
    """Customer name, address or contact spans more than one line"""


class InvalidAmountError(ValidationError):
    """Amount is negative, zero where it must be positive, or not a number"""


class DuplicateAccountError(ValidationError):
    """An account with the same number already exists"""


class AccountNotFoundError(BankError, LookupError):
    """No account carries the requested number"""


class InsufficientFundsError(BankError):
    """Withdrawal larger than the available balance"""


class StorageError(BankError):
    """Persisted account data could not be read or written"""


class StorageFormatError(StorageError):
    """Persisted account data is malformed"""

    def __init__(self, message: str, line_number: Optional[int] = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
