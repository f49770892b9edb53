"""Tests for tax year configuration lookup."""

from dataclasses import FrozenInstanceError
from decimal import Decimal

import pytest

from whatif.core.errors import ConfigurationError
from whatif.tax.year_config import (
    TAX_YEAR_2025,
    FederalFilingStatus,
    get_tax_year_config,
)


def test_get_2025_config() -> None:
    """2025 is registered."""
    assert get_tax_year_config(2025) is TAX_YEAR_2025


def test_unknown_year_raises() -> None:
    """Unknown years fail with the available years listed."""
    with pytest.raises(ConfigurationError, match="Available years: \\[2025\\]"):
        get_tax_year_config(1999)


def test_config_is_frozen() -> None:
    """Configs cannot be reassigned."""
    with pytest.raises(FrozenInstanceError):
        TAX_YEAR_2025.ctc_per_child = Decimal("0")  # type: ignore[misc]


def test_tables_are_read_only() -> None:
    """Lookup tables reject mutation."""
    with pytest.raises(TypeError):
        TAX_YEAR_2025.standard_deductions[FederalFilingStatus.SINGLE] = Decimal("1")  # type: ignore[index]


def test_brackets_ascend_and_end_unbounded() -> None:
    """Every schedule ascends and its last bracket has no upper bound."""
    for status in FederalFilingStatus:
        brackets = TAX_YEAR_2025.brackets(status)
        bounds = [b.up_to for b in brackets[:-1]]
        assert bounds == sorted(bounds)
        assert brackets[-1].up_to is None
