"""Propagation of a three-point delta onto a baseline scalar."""

from __future__ import annotations

from decimal import Decimal

from whatif.scenarios.models import Range
from whatif.tax.money import clamp_min_zero


def propagate_range(base_value: Decimal, delta: Range[Decimal]) -> Range[Decimal]:
    """Apply each delta point to a base value, clamped at zero.

    Clamping runs before any tax computation because the tax functions are
    only defined on non-negative amounts. The result is not re-sorted: a
    steep negative low delta can clamp to 0 while base stays positive, and
    the caller sees that as-is.

    Args:
        base_value: Baseline scalar (e.g. baseline AGI).
        delta: Low/base/high change to apply.

    Returns:
        Range of clamped values.

    Example:
        >>> propagate_range(Decimal("1000"), Range.of(-5000, 0, 500))
        Range(low=Decimal('0'), base=Decimal('1000'), high=Decimal('1500'))
    """
    return delta.map(lambda d: clamp_min_zero(base_value + d))
