"""Tax year-specific constants and thresholds.

This module centralizes tax year-specific federal values (brackets, standard
deductions, preferential-rate thresholds and Child Tax Credit parameters) so
the federal computation never hardcodes them.

Example:
    >>> from whatif.tax.year_config import FederalFilingStatus, get_tax_year_config
    >>> config = get_tax_year_config(2025)
    >>> config.standard_deduction(FederalFilingStatus.SINGLE)
    Decimal('15000')
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from whatif.core.errors import ConfigurationError


class FederalFilingStatus(str, Enum):
    """Filing status codes understood by the federal computation."""

    SINGLE = "single"
    MFJ = "mfj"
    MFS = "mfs"
    HOH = "hoh"
    QW = "qw"


@dataclass(frozen=True)
class Bracket:
    """One ordinary-income bracket.

    Attributes:
        up_to: Inclusive upper bound of the bracket, or None for the top bracket.
        rate: Marginal rate applied inside the bracket.
    """

    up_to: Decimal | None
    rate: Decimal


@dataclass(frozen=True)
class PreferentialThresholds:
    """Taxable-income thresholds for the 0% and 15% preferential bands."""

    zero_up_to: Decimal
    fifteen_up_to: Decimal


@dataclass(frozen=True)
class TaxYearConfig:
    """Federal tax year constants.

    All monetary values are Decimal. The dataclass is frozen and the mappings
    are read-only views, so a config can be shared across concurrent requests.

    Attributes:
        tax_year: The tax year these values apply to.
        ordinary_brackets: Ordinary brackets per filing status, ascending.
        standard_deductions: Standard deduction per filing status.
        preferential_thresholds: 0%/15% band limits per filing status.
        ctc_per_child: Maximum Child Tax Credit per qualifying child.
        ctc_phaseout_start: AGI above which the CTC phases out.
        ctc_phaseout_step: AGI increment (or part thereof) per reduction.
        ctc_phaseout_reduction: Credit reduction per increment.
    """

    tax_year: int
    ordinary_brackets: Mapping[FederalFilingStatus, tuple[Bracket, ...]]
    standard_deductions: Mapping[FederalFilingStatus, Decimal]
    preferential_thresholds: Mapping[FederalFilingStatus, PreferentialThresholds]
    ctc_per_child: Decimal
    ctc_phaseout_start: Mapping[FederalFilingStatus, Decimal]
    ctc_phaseout_step: Decimal = Decimal("1000")
    ctc_phaseout_reduction: Decimal = Decimal("50")

    def standard_deduction(self, filing_status: FederalFilingStatus) -> Decimal:
        """Standard deduction for a filing status (no age/blind additions)."""
        return self.standard_deductions[filing_status]

    def brackets(self, filing_status: FederalFilingStatus) -> tuple[Bracket, ...]:
        """Ordinary brackets for a filing status."""
        return self.ordinary_brackets[filing_status]


def _brackets(*rows: tuple[str | None, str]) -> tuple[Bracket, ...]:
    return tuple(
        Bracket(up_to=Decimal(up_to) if up_to is not None else None, rate=Decimal(rate))
        for up_to, rate in rows
    )


_BRACKETS_2025_SINGLE = _brackets(
    ("11925", "0.10"),
    ("48475", "0.12"),
    ("103350", "0.22"),
    ("197300", "0.24"),
    ("250525", "0.32"),
    ("626350", "0.35"),
    (None, "0.37"),
)
_BRACKETS_2025_MFJ = _brackets(
    ("23850", "0.10"),
    ("96950", "0.12"),
    ("206700", "0.22"),
    ("394600", "0.24"),
    ("501050", "0.32"),
    ("751600", "0.35"),
    (None, "0.37"),
)
_BRACKETS_2025_MFS = _brackets(
    ("11925", "0.10"),
    ("48475", "0.12"),
    ("103350", "0.22"),
    ("197300", "0.24"),
    ("250525", "0.32"),
    ("375800", "0.35"),
    (None, "0.37"),
)
_BRACKETS_2025_HOH = _brackets(
    ("17000", "0.10"),
    ("64850", "0.12"),
    ("103350", "0.22"),
    ("197300", "0.24"),
    ("250500", "0.32"),
    ("626350", "0.35"),
    (None, "0.37"),
)

# 2025 Configuration - IRS Rev. Proc. 2024-40 values
TAX_YEAR_2025 = TaxYearConfig(
    tax_year=2025,
    ordinary_brackets=MappingProxyType(
        {
            FederalFilingStatus.SINGLE: _BRACKETS_2025_SINGLE,
            FederalFilingStatus.MFJ: _BRACKETS_2025_MFJ,
            FederalFilingStatus.MFS: _BRACKETS_2025_MFS,
            FederalFilingStatus.HOH: _BRACKETS_2025_HOH,
            # Qualifying surviving spouse uses MFJ brackets
            FederalFilingStatus.QW: _BRACKETS_2025_MFJ,
        }
    ),
    standard_deductions=MappingProxyType(
        {
            FederalFilingStatus.SINGLE: Decimal("15000"),
            FederalFilingStatus.MFJ: Decimal("30000"),
            FederalFilingStatus.MFS: Decimal("15000"),
            FederalFilingStatus.HOH: Decimal("22500"),
            FederalFilingStatus.QW: Decimal("30000"),
        }
    ),
    preferential_thresholds=MappingProxyType(
        {
            FederalFilingStatus.SINGLE: PreferentialThresholds(
                Decimal("48350"), Decimal("533400")
            ),
            FederalFilingStatus.MFJ: PreferentialThresholds(
                Decimal("96700"), Decimal("600050")
            ),
            FederalFilingStatus.MFS: PreferentialThresholds(
                Decimal("48350"), Decimal("300000")
            ),
            FederalFilingStatus.HOH: PreferentialThresholds(
                Decimal("64750"), Decimal("566700")
            ),
            FederalFilingStatus.QW: PreferentialThresholds(
                Decimal("96700"), Decimal("600050")
            ),
        }
    ),
    ctc_per_child=Decimal("2000"),
    ctc_phaseout_start=MappingProxyType(
        {
            FederalFilingStatus.SINGLE: Decimal("200000"),
            FederalFilingStatus.HOH: Decimal("200000"),
            FederalFilingStatus.MFS: Decimal("200000"),
            FederalFilingStatus.MFJ: Decimal("400000"),
            FederalFilingStatus.QW: Decimal("400000"),
        }
    ),
)

# Registry of available tax year configurations
TAX_YEAR_CONFIGS: Mapping[int, TaxYearConfig] = MappingProxyType(
    {
        2025: TAX_YEAR_2025,
    }
)


def get_tax_year_config(year: int) -> TaxYearConfig:
    """Get configuration for a specific tax year.

    Args:
        year: The tax year (e.g., 2025).

    Returns:
        TaxYearConfig for the specified year.

    Raises:
        ConfigurationError: If no configuration exists for the requested year.
    """
    if year not in TAX_YEAR_CONFIGS:
        available = sorted(TAX_YEAR_CONFIGS.keys())
        raise ConfigurationError(
            f"No tax configuration for year {year}. Available years: {available}"
        )
    return TAX_YEAR_CONFIGS[year]
