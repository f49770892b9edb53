"""Decimal helpers for monetary arithmetic.

All amounts the engine produces are Decimal quantized to cents using
ROUND_HALF_UP. Floats are converted through their string form so that
``0.1`` becomes ``Decimal("0.1")`` rather than its binary expansion.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

from whatif.core.errors import ComputationError

Numeric = Union[int, float, str, Decimal]

ZERO = Decimal("0")
CENTS = Decimal("0.01")


def to_money(value: Numeric, field: str = "amount") -> Decimal:
    """Convert a numeric value to a finite Decimal.

    Args:
        value: Integer, float, numeric string, or Decimal.
        field: Name used in the error when the value is rejected.

    Returns:
        The value as a Decimal (not rounded).

    Raises:
        ComputationError: If the value is a bool, not numeric, or not finite.
    """
    if isinstance(value, bool):
        raise ComputationError(f"{field} must be numeric, got bool", field, value)
    try:
        if isinstance(value, Decimal):
            result = value
        elif isinstance(value, float):
            result = Decimal(str(value))
        else:
            result = Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise ComputationError(f"{field} is not numeric: {value!r}", field, value) from exc

    if not result.is_finite():
        raise ComputationError(f"{field} must be finite, got {value!r}", field, value)
    return result


def round_to_cents(value: Decimal) -> Decimal:
    """Round to pennies using ROUND_HALF_UP."""
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def clamp_min_zero(value: Decimal) -> Decimal:
    """Clamp a value to the non-negative domain."""
    return value if value > ZERO else ZERO
