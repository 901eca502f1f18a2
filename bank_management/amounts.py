"""
Amount handling helpers.

Balances and transaction amounts are Decimal values rounded half-up to two
places. Never use float for money.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union

from .exceptions import InvalidAmountError

CENTS = Decimal('0.01')

AmountLike = Union[Decimal, int, float, str]


def to_amount(value: AmountLike) -> Decimal:
    """
    Convert a value to a two-place Decimal amount

    Floats go through str() so 0.1 becomes Decimal('0.10'), not its binary
    expansion.

    Raises:
        InvalidAmountError: If the value is not a finite number
    """
    if isinstance(value, bool):
        raise InvalidAmountError(f"Invalid amount: {value!r}")
    if isinstance(value, float):
        value = str(value)
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
        if not amount.is_finite():
            raise InvalidAmountError(f"Invalid amount: {value!r}")
        return amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise InvalidAmountError(f"Invalid amount: {value!r}") from None


def require_positive(value: AmountLike) -> Decimal:
    """Convert and check that an amount is strictly positive"""
    amount = to_amount(value)
    if amount <= 0:
        raise InvalidAmountError(f"Amount must be positive, got {amount}")
    return amount
