"""Reference federal income tax computation.

This module provides the federal collaborator used by the scenario engine:
- Standard deduction lookup
- Ordinary income tax using marginal brackets
- Preferential (qualified dividend / long-term gain) tax via stacking
- Simplified Child Tax Credit with AGI phaseout, applied nonrefundably

It does not model AMT, NIIT, SE tax, itemizing, EITC or other credits.
All monetary values use Decimal and results are rounded to cents.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_CEILING, Decimal

from whatif.core.config import settings
from whatif.core.errors import ComputationError
from whatif.tax.money import ZERO, clamp_min_zero, round_to_cents
from whatif.tax.year_config import (
    Bracket,
    FederalFilingStatus,
    TaxYearConfig,
    get_tax_year_config,
)


@dataclass(frozen=True)
class FederalIncomeTax:
    """Income tax before credits, split by rate schedule."""

    ordinary_tax: Decimal
    preferential_tax: Decimal
    total_before_credits: Decimal


@dataclass(frozen=True)
class CTCApplication:
    """Result of applying the Child Tax Credit against income tax.

    Attributes:
        used: Credit absorbed by the tax liability.
        income_tax_after_ctc: Liability remaining after the credit.
        unused: Credit left over because it cannot exceed the liability.
    """

    used: Decimal
    income_tax_after_ctc: Decimal
    unused: Decimal


@dataclass(frozen=True)
class FederalTaxResult:
    """Full federal computation for one taxpayer position.

    Attributes:
        standard_deduction: Standard deduction for the filing status.
        taxable_income: AGI less the standard deduction (minimum 0).
        ordinary_tax: Tax on ordinary taxable income.
        preferential_tax: Tax on preferential taxable income.
        income_tax_before_credits: ordinary_tax + preferential_tax.
        ctc_available: Credit after phaseout, before the liability limit.
        ctc_used_nonrefundable: Credit actually applied.
        income_tax_after_ctc: Liability after the credit (minimum 0).
        ctc_unused: Credit that could not be applied.
    """

    standard_deduction: Decimal
    taxable_income: Decimal
    ordinary_tax: Decimal
    preferential_tax: Decimal
    income_tax_before_credits: Decimal
    ctc_available: Decimal
    ctc_used_nonrefundable: Decimal
    income_tax_after_ctc: Decimal
    ctc_unused: Decimal


def compute_bracket_tax(taxable: Decimal, brackets: tuple[Bracket, ...]) -> Decimal:
    """Compute tax on an amount using a marginal bracket table.

    Args:
        taxable: Taxable amount; negative values are treated as 0.
        brackets: Ascending brackets, the last one unbounded.

    Returns:
        Tax rounded to cents.

    Example:
        >>> compute_bracket_tax(Decimal("20000"), config.brackets(FederalFilingStatus.SINGLE))
        Decimal('2161.50')
    """
    amount = clamp_min_zero(taxable)
    tax = ZERO
    prev_upper = ZERO

    for bracket in brackets:
        if amount <= prev_upper:
            break
        upper = amount if bracket.up_to is None else min(amount, bracket.up_to)
        tax += (upper - prev_upper) * bracket.rate
        if bracket.up_to is None:
            break
        prev_upper = bracket.up_to

    return round_to_cents(tax)


class ReferenceFederalTaxService:
    """Federal tax collaborator backed by a TaxYearConfig.

    Stateless apart from its read-only config, so one instance may be shared
    across concurrent requests.
    """

    def __init__(self, config: TaxYearConfig | None = None) -> None:
        """Initialize with a tax year config.

        Args:
            config: Year constants. Defaults to the config for settings.tax_year.
        """
        self.config = config or get_tax_year_config(settings.tax_year)

    @property
    def tax_year(self) -> int:
        """Tax year of the underlying config."""
        return self.config.tax_year

    def get_standard_deduction(self, filing_status: FederalFilingStatus) -> Decimal:
        """Get the standard deduction for a filing status.

        Args:
            filing_status: Federal filing status code.

        Returns:
            Standard deduction amount.
        """
        return self.config.standard_deduction(FederalFilingStatus(filing_status))

    def compute_income_tax(
        self,
        filing_status: FederalFilingStatus,
        taxable_ordinary_income: Decimal,
        taxable_preferential_income: Decimal,
    ) -> FederalIncomeTax:
        """Compute income tax before credits.

        Ordinary income is taxed at bracket rates. Preferential income is
        stacked on top of ordinary income and taxed at 0/15/20 based on the
        total taxable income thresholds.

        Args:
            filing_status: Federal filing status code.
            taxable_ordinary_income: Ordinary income after deductions.
            taxable_preferential_income: Qualified dividends plus net LTCG.

        Returns:
            FederalIncomeTax with the ordinary/preferential split.
        """
        status = FederalFilingStatus(filing_status)
        ordinary = clamp_min_zero(taxable_ordinary_income)
        preferential = clamp_min_zero(taxable_preferential_income)

        ordinary_tax = compute_bracket_tax(ordinary, self.config.brackets(status))

        thresholds = self.config.preferential_thresholds[status]
        zero_band_room = clamp_min_zero(thresholds.zero_up_to - ordinary)
        at_zero = min(preferential, zero_band_room)

        fifteen_band_room = clamp_min_zero(
            thresholds.fifteen_up_to - max(ordinary, thresholds.zero_up_to)
        )
        at_fifteen = min(clamp_min_zero(preferential - at_zero), fifteen_band_room)
        at_twenty = clamp_min_zero(preferential - at_zero - at_fifteen)

        preferential_tax = round_to_cents(
            at_fifteen * Decimal("0.15") + at_twenty * Decimal("0.20")
        )

        return FederalIncomeTax(
            ordinary_tax=ordinary_tax,
            preferential_tax=preferential_tax,
            total_before_credits=round_to_cents(ordinary_tax + preferential_tax),
        )

    def compute_ctc_available(
        self,
        filing_status: FederalFilingStatus,
        agi: Decimal,
        qualifying_children_under_17: int,
    ) -> Decimal:
        """Calculate the Child Tax Credit after phaseout.

        The credit is reduced by a fixed amount for each $1,000 (or part
        thereof) of AGI above the phaseout start. AGI stands in for MAGI.

        Args:
            filing_status: Federal filing status code.
            agi: Adjusted Gross Income.
            qualifying_children_under_17: Number of qualifying children.

        Returns:
            Credit available before the nonrefundable limit.
        """
        if qualifying_children_under_17 <= 0:
            return ZERO

        max_credit = self.config.ctc_per_child * qualifying_children_under_17
        start = self.config.ctc_phaseout_start[FederalFilingStatus(filing_status)]
        over = agi - start
        if over <= ZERO:
            return max_credit

        # Round up to the next whole increment
        increments = (over / self.config.ctc_phaseout_step).to_integral_value(
            rounding=ROUND_CEILING
        )
        reduction = increments * self.config.ctc_phaseout_reduction
        return clamp_min_zero(max_credit - reduction)

    @staticmethod
    def apply_nonrefundable_ctc(
        income_tax_before_credits: Decimal, ctc_available: Decimal
    ) -> CTCApplication:
        """Apply the CTC, limited to the liability it offsets."""
        tax = clamp_min_zero(income_tax_before_credits)
        credit = clamp_min_zero(ctc_available)
        used = min(tax, credit)
        return CTCApplication(
            used=round_to_cents(used),
            income_tax_after_ctc=round_to_cents(tax - used),
            unused=round_to_cents(credit - used),
        )

    def compute_federal_baseline(
        self,
        filing_status: FederalFilingStatus,
        agi: Decimal,
        taxable_ordinary_income_after_deduction: Decimal,
        taxable_preferential_income_after_deduction: Decimal,
        qualifying_children_under_17: int,
    ) -> FederalTaxResult:
        """Full federal computation from AGI and taxable income splits.

        Args:
            filing_status: Federal filing status code.
            agi: Adjusted Gross Income (drives the CTC phaseout).
            taxable_ordinary_income_after_deduction: Ordinary taxable income.
            taxable_preferential_income_after_deduction: Preferential taxable income.
            qualifying_children_under_17: Number of qualifying children.

        Returns:
            FederalTaxResult with tax before and after the CTC.

        Raises:
            ComputationError: If AGI, a taxable component, or the child count
                is negative.
        """
        _require_non_negative("agi", agi)
        _require_non_negative(
            "taxable_ordinary_income_after_deduction",
            taxable_ordinary_income_after_deduction,
        )
        _require_non_negative(
            "taxable_preferential_income_after_deduction",
            taxable_preferential_income_after_deduction,
        )
        if qualifying_children_under_17 < 0:
            raise ComputationError(
                "qualifying_children_under_17 must be >= 0",
                "qualifying_children_under_17",
                qualifying_children_under_17,
            )

        status = FederalFilingStatus(filing_status)
        standard_deduction = self.get_standard_deduction(status)
        taxable_income = round_to_cents(clamp_min_zero(agi - standard_deduction))

        taxes = self.compute_income_tax(
            status,
            taxable_ordinary_income_after_deduction,
            taxable_preferential_income_after_deduction,
        )
        ctc_available = self.compute_ctc_available(
            status, agi, qualifying_children_under_17
        )
        applied = self.apply_nonrefundable_ctc(taxes.total_before_credits, ctc_available)

        return FederalTaxResult(
            standard_deduction=standard_deduction,
            taxable_income=taxable_income,
            ordinary_tax=taxes.ordinary_tax,
            preferential_tax=taxes.preferential_tax,
            income_tax_before_credits=taxes.total_before_credits,
            ctc_available=round_to_cents(ctc_available),
            ctc_used_nonrefundable=applied.used,
            income_tax_after_ctc=applied.income_tax_after_ctc,
            ctc_unused=applied.unused,
        )


def _require_non_negative(field: str, value: Decimal) -> None:
    if value < ZERO:
        raise ComputationError(f"{field} must be >= 0, got {value}", field, value)
