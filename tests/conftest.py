"""Pytest configuration and shared fixtures for tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

import pytest

from whatif.core.errors import ComputationError
from whatif.scenarios.models import Totals
from whatif.tax.federal import ReferenceFederalTaxService
from whatif.tax.state import ReferenceStateTaxService


@dataclass(frozen=True)
class FakeFederalOutcome:
    income_tax_after_ctc: Decimal


@dataclass(frozen=True)
class FakeStateOutcome:
    state_income_tax: Decimal


@dataclass
class FlatRateFederalService:
    """Federal fake taxing ordinary income at one rate.

    Records every call so tests can inspect what the engine passed.
    """

    rate: Decimal = Decimal("0.175")
    standard_deduction: Decimal = Decimal("15000")
    calls: list[dict[str, Any]] = field(default_factory=list)

    def get_standard_deduction(self, filing_status: Any) -> Decimal:
        return self.standard_deduction

    def compute_federal_baseline(self, **kwargs: Any) -> FakeFederalOutcome:
        self.calls.append(kwargs)
        if kwargs["agi"] < 0:
            raise ComputationError("negative agi", "agi", kwargs["agi"])
        tax = kwargs["taxable_ordinary_income_after_deduction"] * self.rate
        return FakeFederalOutcome(income_tax_after_ctc=tax)


@dataclass
class FlatRateStateService:
    """State fake taxing the base at one rate, recording every call."""

    rate: Decimal = Decimal("0.05")
    calls: list[dict[str, Any]] = field(default_factory=list)

    def compute_state_income_tax(self, **kwargs: Any) -> FakeStateOutcome:
        self.calls.append(kwargs)
        return FakeStateOutcome(state_income_tax=kwargs["taxable_base"] * self.rate)


@dataclass
class FailingStateService:
    """State fake that raises once taxable_base exceeds a limit."""

    limit: Decimal
    error: Exception = field(
        default_factory=lambda: ComputationError("state service rejected input")
    )
    calls: int = 0

    def compute_state_income_tax(self, **kwargs: Any) -> FakeStateOutcome:
        self.calls += 1
        if kwargs["taxable_base"] > self.limit:
            raise self.error
        return FakeStateOutcome(state_income_tax=Decimal("0"))


@pytest.fixture
def flat_federal() -> FlatRateFederalService:
    """Federal fake at 17.5% with a $15,000 standard deduction.

    Returns:
        FlatRateFederalService instance.
    """
    return FlatRateFederalService()


@pytest.fixture
def flat_state() -> FlatRateStateService:
    """State fake at 5%.

    Returns:
        FlatRateStateService instance.
    """
    return FlatRateStateService()


@pytest.fixture
def failing_state_factory() -> type[FailingStateService]:
    """Factory for state fakes that fail above a taxable base.

    Returns:
        The FailingStateService class.
    """
    return FailingStateService


@pytest.fixture
def reference_federal() -> ReferenceFederalTaxService:
    """Reference 2025 federal service.

    Returns:
        ReferenceFederalTaxService instance.
    """
    return ReferenceFederalTaxService()


@pytest.fixture
def reference_state() -> ReferenceStateTaxService:
    """Reference state service.

    Returns:
        ReferenceStateTaxService instance.
    """
    return ReferenceStateTaxService()


@pytest.fixture
def scenario_a_baseline() -> Totals:
    """High-income single filer baseline consistent with the flat fakes.

    17.5% x 400,000 = 70,000 federal; 5% x 400,000 = 20,000 state.

    Returns:
        Baseline Totals.
    """
    return Totals(
        federal_tax=Decimal("70000"),
        state_tax=Decimal("20000"),
        total_tax=Decimal("90000"),
        taxable_income=Decimal("400000"),
    )
