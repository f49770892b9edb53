"""Evaluation of scenario points through the federal and state collaborators.

Each point is an AGI figure. Taxable income is derived from it with the
standard deduction, then the federal and state collaborators are called and
their results assembled into a Totals record. Only ordinary income moves
between scenarios: preferential income is fixed at zero on this path.

Collaborator errors are never caught here. A Range is returned only when all
three points evaluate; otherwise the first error propagates unchanged.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Protocol

from whatif.core.logging import get_logger
from whatif.scenarios.filing_status import NormalizedFilingStatus
from whatif.scenarios.models import Range, Totals
from whatif.tax.money import ZERO, clamp_min_zero, round_to_cents
from whatif.tax.state_tables import StateFilingStatus
from whatif.tax.year_config import FederalFilingStatus

logger = get_logger(__name__)


class FederalTaxOutcome(Protocol):
    income_tax_after_ctc: Decimal


class StateTaxOutcome(Protocol):
    state_income_tax: Decimal


class FederalTaxService(Protocol):
    """Federal collaborator contract.

    Implementations apply the Child Tax Credit phaseout and the nonrefundable
    limit themselves; the engine never recomputes either.
    """

    def get_standard_deduction(self, filing_status: FederalFilingStatus) -> Decimal:
        ...

    def compute_federal_baseline(
        self,
        filing_status: FederalFilingStatus,
        agi: Decimal,
        taxable_ordinary_income_after_deduction: Decimal,
        taxable_preferential_income_after_deduction: Decimal,
        qualifying_children_under_17: int,
    ) -> FederalTaxOutcome:
        ...


class StateTaxService(Protocol):
    """State collaborator contract."""

    def compute_state_income_tax(
        self,
        tax_year: int,
        state: str,
        filing_status: StateFilingStatus,
        taxable_base: Decimal,
    ) -> StateTaxOutcome:
        ...


class ScenarioTaxEvaluator:
    """Evaluates AGI points into Totals for one filing status and state.

    Attributes:
        federal_service: Federal collaborator.
        state_service: State collaborator.
        tax_year: Tax year passed to the state collaborator.
    """

    def __init__(
        self,
        federal_service: FederalTaxService,
        state_service: StateTaxService,
        tax_year: int,
    ) -> None:
        self.federal_service = federal_service
        self.state_service = state_service
        self.tax_year = tax_year

    def evaluate_point(
        self,
        agi: Decimal,
        filing_status: NormalizedFilingStatus,
        state: str,
        qualifying_children_under_17: int,
    ) -> Totals:
        """Compute Totals for a single AGI.

        Args:
            agi: Non-negative AGI for this point.
            filing_status: Normalized filing status.
            state: Two-letter state code.
            qualifying_children_under_17: Qualifying children for the CTC.

        Returns:
            Totals with total_tax = federal_tax + state_tax.
        """
        standard_deduction = self.federal_service.get_standard_deduction(
            filing_status.federal
        )
        taxable_income = clamp_min_zero(agi - standard_deduction)

        federal = self.federal_service.compute_federal_baseline(
            filing_status=filing_status.federal,
            agi=agi,
            taxable_ordinary_income_after_deduction=taxable_income,
            taxable_preferential_income_after_deduction=ZERO,
            qualifying_children_under_17=qualifying_children_under_17,
        )
        state_out = self.state_service.compute_state_income_tax(
            tax_year=self.tax_year,
            state=state,
            filing_status=filing_status.state,
            taxable_base=taxable_income,
        )

        return Totals.from_components(
            federal_tax=round_to_cents(clamp_min_zero(federal.income_tax_after_ctc)),
            state_tax=round_to_cents(clamp_min_zero(state_out.state_income_tax)),
            taxable_income=round_to_cents(taxable_income),
        )

    def evaluate_range(
        self,
        agis: Range[Decimal],
        filing_status: NormalizedFilingStatus,
        state: str,
        qualifying_children_under_17: int,
    ) -> Range[Totals]:
        """Compute Totals for the low, base and high AGI points.

        Raises:
            Whatever a collaborator raises, unchanged. No partial Range is
            ever returned.
        """
        revised = agis.map(
            lambda agi: self.evaluate_point(
                agi, filing_status, state, qualifying_children_under_17
            )
        )
        logger.debug(
            "scenario_points_evaluated",
            agi_low=agis.low,
            agi_base=agis.base,
            agi_high=agis.high,
            total_tax_base=revised.base.total_tax,
        )
        return revised
