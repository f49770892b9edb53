"""Scenario recomputation entry points.

recompute_scenario turns a baseline position and a taxable-income delta range
into revised low/base/high Totals:

1. Normalize the filing status into federal and state codes.
2. Derive the baseline AGI (override, or taxable income + standard deduction).
3. Apply the delta to the AGI, clamped at zero.
4. Evaluate each AGI point through the tax collaborators.
5. Assemble the tax delta against the baseline.

The taxable-income delta is applied to AGI rather than taxable income so the
Child Tax Credit phaseout sees the revised income. Every call is independent
and nothing is cached between calls.

Example:
    >>> baseline = compute_baseline("SINGLE", "CO", Decimal("415000"), 0)
    >>> result = recompute_scenario(
    ...     baseline, "SINGLE", "CO", Range.of(-50000, -30000, -10000), 0
    ... )
    >>> result.total_tax_delta.base > 0
    True
"""

from __future__ import annotations

from decimal import Decimal

from whatif.core.config import settings
from whatif.core.logging import get_logger
from whatif.scenarios.agi import derive_baseline_agi
from whatif.scenarios.evaluator import (
    FederalTaxService,
    ScenarioTaxEvaluator,
    StateTaxService,
)
from whatif.scenarios.filing_status import normalize_filing_status
from whatif.scenarios.models import FilingStatus, Range, ScenarioResult, Totals
from whatif.scenarios.ranges import propagate_range
from whatif.tax.federal import ReferenceFederalTaxService
from whatif.tax.money import Numeric, clamp_min_zero, round_to_cents, to_money
from whatif.tax.state import ReferenceStateTaxService
from whatif.tax.year_config import get_tax_year_config

logger = get_logger(__name__)


def _build_evaluator(
    federal_service: FederalTaxService | None,
    state_service: StateTaxService | None,
    tax_year: int | None,
) -> ScenarioTaxEvaluator:
    year = settings.tax_year if tax_year is None else tax_year
    if federal_service is None:
        federal_service = ReferenceFederalTaxService(get_tax_year_config(year))
    if state_service is None:
        state_service = ReferenceStateTaxService()
    return ScenarioTaxEvaluator(federal_service, state_service, year)


def _normalize_children(qualifying_children_under_17: int | None) -> int:
    return max(0, int(qualifying_children_under_17 or 0))


def assemble_deltas(baseline: Totals, revised_range: Range[Totals]) -> Range[Decimal]:
    """Compute baseline.total_tax - revised.total_tax for each point.

    Values are not clamped; a negative delta means the scenario raises tax.
    """
    return revised_range.map(
        lambda revised: round_to_cents(baseline.total_tax - revised.total_tax)
    )


def compute_baseline(
    filing_status: FilingStatus | str,
    state: str,
    agi: Numeric,
    qualifying_children_under_17: int,
    *,
    federal_service: FederalTaxService | None = None,
    state_service: StateTaxService | None = None,
    tax_year: int | None = None,
) -> Totals:
    """Compute baseline Totals at a known AGI.

    A baseline built here uses the same collaborators as the scenarios
    recomputed against it, so a zero delta reproduces it exactly.

    Args:
        filing_status: Intake filing status.
        state: Two-letter state code.
        agi: Baseline AGI; negative values are clamped to 0.
        qualifying_children_under_17: Qualifying children for the CTC.
        federal_service: Federal collaborator (reference 2025 tables by default).
        state_service: State collaborator (reference tables by default).
        tax_year: Tax year; defaults to settings.tax_year.

    Returns:
        Baseline Totals.

    Raises:
        ConfigurationError: Unknown filing status, state code, or tax year.
        ComputationError: A collaborator rejected its inputs.
    """
    status = normalize_filing_status(filing_status)
    evaluator = _build_evaluator(federal_service, state_service, tax_year)
    return evaluator.evaluate_point(
        clamp_min_zero(to_money(agi, "agi")),
        status,
        state,
        _normalize_children(qualifying_children_under_17),
    )


def recompute_scenario(
    baseline: Totals,
    filing_status: FilingStatus | str,
    state: str,
    taxable_income_delta: Range[Decimal],
    qualifying_children_under_17: int,
    agi_override: Numeric | None = None,
    *,
    federal_service: FederalTaxService | None = None,
    state_service: StateTaxService | None = None,
    tax_year: int | None = None,
) -> ScenarioResult:
    """Recompute revised Totals for a low/base/high taxable-income change.

    Args:
        baseline: Current-law Totals for the session; never modified.
        filing_status: Intake filing status.
        state: Two-letter state code.
        taxable_income_delta: Change in taxable income per point; ints,
            floats and numeric strings are converted to Decimal.
        qualifying_children_under_17: Qualifying children; negatives become 0.
        agi_override: True baseline AGI, replacing the taxable income +
            standard deduction approximation.
        federal_service: Federal collaborator (reference 2025 tables by default).
        state_service: State collaborator (reference tables by default).
        tax_year: Tax year; defaults to settings.tax_year.

    Returns:
        ScenarioResult with revised Totals, tax delta, and the delta given.

    Raises:
        ConfigurationError: Unknown filing status, state code, or tax year.
        ComputationError: A delta point is not a finite number, or a
            collaborator rejected its inputs.
    """
    status = normalize_filing_status(filing_status)
    kids = _normalize_children(qualifying_children_under_17)
    taxable_income_delta = taxable_income_delta.map(
        lambda d: to_money(d, "taxable_income_delta")
    )
    evaluator = _build_evaluator(federal_service, state_service, tax_year)

    logger.debug(
        "scenario_recompute_start",
        filing_status=status.intake.value,
        state=state,
        tax_year=evaluator.tax_year,
        delta_base=taxable_income_delta.base,
        agi_override_supplied=agi_override is not None,
    )

    try:
        standard_deduction = evaluator.federal_service.get_standard_deduction(
            status.federal
        )
        baseline_agi = derive_baseline_agi(baseline, standard_deduction, agi_override)
        revised_agi = propagate_range(baseline_agi.agi, taxable_income_delta)

        clamped = [
            name
            for name, delta in zip(("low", "base", "high"), taxable_income_delta.points())
            if baseline_agi.agi + delta < 0
        ]
        if clamped:
            logger.warning(
                "scenario_range_clamped",
                clamped_points=clamped,
                agi_low=revised_agi.low,
                agi_base=revised_agi.base,
                agi_high=revised_agi.high,
            )

        revised_range = evaluator.evaluate_range(revised_agi, status, state, kids)
    except Exception as exc:
        logger.warning(
            "scenario_recompute_failed",
            filing_status=status.intake.value,
            state=state,
            error_type=type(exc).__name__,
            error=str(exc),
        )
        raise

    total_tax_delta = assemble_deltas(baseline, revised_range)

    logger.info(
        "scenario_recompute_complete",
        filing_status=status.intake.value,
        state=state,
        agi_source=baseline_agi.source.value,
        total_tax_delta_base=total_tax_delta.base,
    )

    return ScenarioResult(
        baseline=baseline,
        revised=revised_range.base,
        revised_range=revised_range,
        total_tax_delta=total_tax_delta,
        total_taxable_income_delta=taxable_income_delta,
        baseline_agi=baseline_agi,
        revised_agi=revised_agi,
    )
