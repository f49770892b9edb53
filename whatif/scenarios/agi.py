"""Baseline AGI derivation.

The federal computation needs AGI to evaluate credit phaseouts, but a session
baseline usually carries only taxable income. With standard deduction filers,
taxable income = AGI - standard deduction, so AGI is approximated by adding
the deduction back. The approximation misses above-the-line adjustments;
callers who know the true AGI pass it as an override.
"""

from __future__ import annotations

from decimal import Decimal

from whatif.scenarios.models import AgiBasis, AgiSource, Totals
from whatif.tax.money import Numeric, clamp_min_zero, to_money


def derive_baseline_agi(
    baseline: Totals,
    standard_deduction: Decimal,
    agi_override: Numeric | None = None,
) -> AgiBasis:
    """Derive the baseline AGI for a scenario run.

    Args:
        baseline: Baseline Totals; only taxable_income is read.
        standard_deduction: Standard deduction for the taxpayer's status.
        agi_override: True AGI, when the caller has one.

    Returns:
        AgiBasis with the clamped AGI and the assumption used.

    Raises:
        ComputationError: If the override is not a finite number.
    """
    if agi_override is not None:
        return AgiBasis(
            agi=clamp_min_zero(to_money(agi_override, "agi_override")),
            source=AgiSource.OVERRIDE,
            standard_deduction=standard_deduction,
        )

    return AgiBasis(
        agi=clamp_min_zero(baseline.taxable_income + standard_deduction),
        source=AgiSource.TAXABLE_INCOME_PLUS_STANDARD_DEDUCTION,
        standard_deduction=standard_deduction,
    )
