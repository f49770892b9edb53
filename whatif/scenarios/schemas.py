"""Pydantic request schema for scenario recomputation.

Callers holding JSON (camelCase or snake_case keys) validate it here before
it reaches the engine. Unknown keys are rejected, amounts must be finite, and
a baseline whose total does not reconcile with its components fails
validation rather than flowing into the arithmetic.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    model_validator,
)
from pydantic.alias_generators import to_camel

from whatif.core.logging import session_id_ctx
from whatif.scenarios.engine import recompute_scenario
from whatif.scenarios.evaluator import FederalTaxService, StateTaxService
from whatif.scenarios.models import FilingStatus, Range, ScenarioResult, Totals

Money = Annotated[Decimal, Field(allow_inf_nan=False)]
StateCode = Annotated[
    str, StringConstraints(strip_whitespace=True, to_upper=True, pattern=r"^[A-Za-z]{2}$")
]

_STRICT_PAYLOAD = ConfigDict(
    extra="forbid",
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
)


class TotalsPayload(BaseModel):
    """Baseline totals as received from a caller."""

    model_config = _STRICT_PAYLOAD

    federal_tax: Money = Field(..., description="Federal income tax after credits")
    state_tax: Money = Field(..., description="State income tax")
    total_tax: Money = Field(..., description="federal_tax + state_tax")
    taxable_income: Money = Field(..., description="Taxable income")

    @model_validator(mode="after")
    def check_reconciliation(self) -> TotalsPayload:
        """Ensure total_tax equals federal_tax + state_tax exactly."""
        if self.total_tax != self.federal_tax + self.state_tax:
            raise ValueError("total_tax must equal federal_tax + state_tax")
        return self

    def to_totals(self) -> Totals:
        return Totals(
            federal_tax=self.federal_tax,
            state_tax=self.state_tax,
            total_tax=self.total_tax,
            taxable_income=self.taxable_income,
        )


class RangePayload(BaseModel):
    """Low/base/high amounts as received from a caller."""

    model_config = _STRICT_PAYLOAD

    low: Money
    base: Money
    high: Money

    def to_range(self) -> Range[Decimal]:
        return Range(low=self.low, base=self.base, high=self.high)


class ScenarioRequest(BaseModel):
    """Validated input for one scenario recomputation."""

    model_config = _STRICT_PAYLOAD

    baseline: TotalsPayload
    filing_status: FilingStatus
    state: StateCode = Field(..., description="Two-letter state code")
    taxable_income_delta: RangePayload
    qualifying_children_under_17: int = Field(
        ..., ge=0, description="Qualifying children under 17 for the CTC"
    )
    agi_override: Money | None = Field(
        None, description="True baseline AGI, replacing the derived proxy"
    )
    session_id: str | None = Field(
        None, max_length=128, description="Analysis session ID attached to log events"
    )


def recompute_scenario_from_request(
    request: ScenarioRequest,
    *,
    federal_service: FederalTaxService | None = None,
    state_service: StateTaxService | None = None,
    tax_year: int | None = None,
) -> ScenarioResult:
    """Run recompute_scenario from a validated request.

    The request's session_id is bound to the logging context for the duration
    of the call.

    Example:
        >>> request = ScenarioRequest.model_validate_json(payload)
        >>> result = recompute_scenario_from_request(request)
    """
    token = session_id_ctx.set(request.session_id)
    try:
        return recompute_scenario(
            baseline=request.baseline.to_totals(),
            filing_status=request.filing_status,
            state=request.state,
            taxable_income_delta=request.taxable_income_delta.to_range(),
            qualifying_children_under_17=request.qualifying_children_under_17,
            agi_override=request.agi_override,
            federal_service=federal_service,
            state_service=state_service,
            tax_year=tax_year,
        )
    finally:
        session_id_ctx.reset(token)
