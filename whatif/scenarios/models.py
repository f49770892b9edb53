"""Data structures for scenario recomputation.

Totals and Range are frozen dataclasses: a Baseline is held unchanged for an
analysis session and every recomputation returns new objects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Callable, Generic, TypeVar

from whatif.core.errors import ComputationError
from whatif.tax.money import ZERO, Numeric, to_money

T = TypeVar("T")
U = TypeVar("U")


class FilingStatus(str, Enum):
    """Intake-level filing status."""

    SINGLE = "SINGLE"
    MARRIED_FILING_JOINTLY = "MARRIED_FILING_JOINTLY"
    MARRIED_FILING_SEPARATELY = "MARRIED_FILING_SEPARATELY"
    HEAD_OF_HOUSEHOLD = "HEAD_OF_HOUSEHOLD"


class AgiSource(str, Enum):
    """Where a baseline AGI figure came from."""

    OVERRIDE = "override"
    TAXABLE_INCOME_PLUS_STANDARD_DEDUCTION = "taxable_income_plus_standard_deduction"


@dataclass(frozen=True)
class Range(Generic[T]):
    """Three-point uncertainty estimate.

    low <= base <= high is a convention, not enforced; see is_ordered().
    """

    low: T
    base: T
    high: T

    @classmethod
    def of(cls, low: Numeric, base: Numeric, high: Numeric) -> Range[Decimal]:
        """Build a money range from numeric values."""
        return cls(
            low=to_money(low, "low"),
            base=to_money(base, "base"),
            high=to_money(high, "high"),
        )

    @classmethod
    def zero(cls) -> Range[Decimal]:
        return cls(low=ZERO, base=ZERO, high=ZERO)

    def map(self, fn: Callable[[T], U]) -> Range[U]:
        """Apply a function to each point, low first."""
        return Range(low=fn(self.low), base=fn(self.base), high=fn(self.high))

    def points(self) -> tuple[T, T, T]:
        return (self.low, self.base, self.high)

    def is_ordered(self, key: Callable[[T], Decimal] | None = None) -> bool:
        """Check the low <= base <= high convention.

        Args:
            key: Extracts the comparable figure from each point. Defaults to
                the point itself.
        """
        low, base, high = (key(p) if key else p for p in self.points())
        return low <= base <= high


@dataclass(frozen=True)
class Totals:
    """Tax totals for one taxpayer position.

    Attributes:
        federal_tax: Federal income tax after credits.
        state_tax: State income tax.
        total_tax: federal_tax + state_tax, exactly.
        taxable_income: Taxable income the figures were computed on.

    Raises:
        ComputationError: If total_tax does not reconcile with its components.
    """

    federal_tax: Decimal
    state_tax: Decimal
    total_tax: Decimal
    taxable_income: Decimal

    def __post_init__(self) -> None:
        for name in ("federal_tax", "state_tax", "total_tax", "taxable_income"):
            object.__setattr__(self, name, to_money(getattr(self, name), name))
        expected = self.federal_tax + self.state_tax
        if self.total_tax != expected:
            raise ComputationError(
                f"total_tax {self.total_tax} != federal_tax + state_tax ({expected})",
                "total_tax",
                self.total_tax,
            )

    @classmethod
    def from_components(
        cls, federal_tax: Numeric, state_tax: Numeric, taxable_income: Numeric
    ) -> Totals:
        """Build Totals with total_tax derived from its components."""
        federal = to_money(federal_tax, "federal_tax")
        state = to_money(state_tax, "state_tax")
        return cls(
            federal_tax=federal,
            state_tax=state,
            total_tax=federal + state,
            taxable_income=to_money(taxable_income, "taxable_income"),
        )


@dataclass(frozen=True)
class AgiBasis:
    """Baseline AGI and the assumption that produced it.

    Without an override, AGI is approximated as taxable income plus the
    standard deduction. Real AGI can include above-the-line adjustments that
    taxable income does not reveal, so callers holding a true AGI should pass
    it as an override.

    source is left out of equality: two bases with the same AGI and deduction
    compare equal however the AGI was obtained.
    """

    agi: Decimal
    source: AgiSource = field(compare=False)
    standard_deduction: Decimal


@dataclass(frozen=True)
class ScenarioResult:
    """Outcome of one scenario recomputation.

    Attributes:
        baseline: The unchanged baseline Totals.
        revised: Base-case revised Totals (revised_range.base).
        revised_range: Revised Totals for low/base/high.
        total_tax_delta: baseline.total_tax - revised total_tax per point;
            positive means the scenario reduces tax.
        total_taxable_income_delta: The caller's taxable-income delta, as given.
        baseline_agi: Baseline AGI and its derivation.
        revised_agi: Clamped AGI each point was evaluated at.
    """

    baseline: Totals
    revised: Totals
    revised_range: Range[Totals]
    total_tax_delta: Range[Decimal]
    total_taxable_income_delta: Range[Decimal]
    baseline_agi: AgiBasis
    revised_agi: Range[Decimal]
