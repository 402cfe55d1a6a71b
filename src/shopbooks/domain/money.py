"""Two-decimal money helpers shared by the ledger services."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union

from shopbooks.domain.errors import ValidationError

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(value: Union[Decimal, int, str], field: str = "Amount") -> Decimal:
    """Convert a value to a Decimal rounded to cents.

    Floats are rejected so binary rounding never leaks into the ledgers.

    Raises:
        ValidationError: If the value is not a finite number
    """
    if isinstance(value, (float, bool)):
        raise ValidationError(f"{field} must be a Decimal, int or string, got {value!r}")
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field} is not a valid amount: {value!r}") from None
    if not amount.is_finite():
        raise ValidationError(f"{field} is not a valid amount: {value!r}")
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def to_positive_money(value: Union[Decimal, int, str], field: str = "Amount") -> Decimal:
    """Like ``to_money`` but the result must be greater than zero."""
    amount = to_money(value, field)
    if amount <= ZERO:
        raise ValidationError(f"{field} must be greater than 0")
    return amount
