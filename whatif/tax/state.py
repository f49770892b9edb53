"""Reference state income tax computation.

Computes state income tax on a caller-chosen taxable base using the rate
structures in ``whatif.tax.state_tables``. The caller decides the base (the
scenario engine passes federal taxable income); no state-specific income
definitions are modeled.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from whatif.core.errors import ComputationError, ConfigurationError
from whatif.tax.money import ZERO, round_to_cents
from whatif.tax.state_tables import (
    HYBRID_THRESHOLD,
    STATE_RATE_TABLES,
    STATE_TAX_ESTIMATE_DISCLOSURE,
    StateFilingStatus,
    StateRateStructure,
    StateTaxMethod,
)


@dataclass(frozen=True)
class StateTaxResult:
    """State income tax for one taxable base.

    Attributes:
        state: Two-letter state code.
        filing_status: State filing status used.
        taxable_base: Base the rate structure was applied to.
        state_income_tax: Tax rounded to cents.
        method: Rate structure used.
        notes: Caveats to surface alongside the figure.
    """

    state: str
    filing_status: StateFilingStatus
    taxable_base: Decimal
    state_income_tax: Decimal
    method: StateTaxMethod
    notes: tuple[str, ...] = ()


def as_state_code(state: str, tax_year: int = 2025) -> str:
    """Normalize a state string to a supported two-letter code.

    Args:
        state: State abbreviation in any case, surrounding whitespace allowed.
        tax_year: Tax year whose table must contain the state.

    Returns:
        Upper-case state code.

    Raises:
        ConfigurationError: If the year has no table or the state is unknown.
    """
    table = _rates_for_year(tax_year)
    code = (state or "").strip().upper()
    if code not in table:
        raise ConfigurationError(
            f"Invalid state code {state!r}. Expected 2-letter USPS code or DC."
        )
    return code


def _rates_for_year(tax_year: int):
    if tax_year not in STATE_RATE_TABLES:
        available = sorted(STATE_RATE_TABLES.keys())
        raise ConfigurationError(
            f"No state tax tables for year {tax_year}. Available years: {available}"
        )
    return STATE_RATE_TABLES[tax_year]


class ReferenceStateTaxService:
    """State tax collaborator over the bundled rate tables."""

    def compute_state_income_tax(
        self,
        tax_year: int,
        state: str,
        filing_status: StateFilingStatus,
        taxable_base: Decimal,
    ) -> StateTaxResult:
        """Compute state income tax.

        Args:
            tax_year: Tax year of the rate table.
            state: Two-letter state code (case-insensitive).
            filing_status: State filing status code.
            taxable_base: Non-negative taxable base.

        Returns:
            StateTaxResult with the tax and any disclosure notes.

        Raises:
            ConfigurationError: Unknown tax year or state code.
            ComputationError: Negative taxable base.
        """
        code = as_state_code(state, tax_year)
        status = StateFilingStatus(filing_status)
        if taxable_base < ZERO:
            raise ComputationError(
                f"taxable_base must be >= 0, got {taxable_base}",
                "taxable_base",
                taxable_base,
            )

        base = round_to_cents(taxable_base)
        structure: StateRateStructure = _rates_for_year(tax_year)[code]
        notes: list[str] = []

        if structure.method is StateTaxMethod.NONE:
            tax = ZERO
        elif structure.method is StateTaxMethod.FLAT:
            tax = base * structure.rate
        else:
            rate_at = structure.rate_at_300k[status]
            top = structure.top_rate[status]
            if base <= HYBRID_THRESHOLD:
                tax = base * rate_at
            else:
                tax = HYBRID_THRESHOLD * rate_at + (base - HYBRID_THRESHOLD) * top
            notes.append(STATE_TAX_ESTIMATE_DISCLOSURE)

        if structure.note:
            notes.append(structure.note)

        return StateTaxResult(
            state=code,
            filing_status=status,
            taxable_base=base,
            state_income_tax=round_to_cents(tax),
            method=structure.method,
            notes=tuple(notes),
        )
