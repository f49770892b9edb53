"""Tests for the scenario request schema."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from whatif.core.errors import ComputationError
from whatif.core.logging import session_id_ctx
from whatif.scenarios.engine import recompute_scenario
from whatif.scenarios.models import FilingStatus, Range, Totals
from whatif.scenarios.schemas import ScenarioRequest, recompute_scenario_from_request


PAYLOAD = """
{
    "baseline": {
        "federalTax": "70000",
        "stateTax": "20000",
        "totalTax": "90000",
        "taxableIncome": "400000"
    },
    "filingStatus": "SINGLE",
    "state": "co",
    "taxableIncomeDelta": {"low": -50000, "base": -30000, "high": -10000},
    "qualifying_children_under_17": 0
}
"""


def _request_dict(**overrides) -> dict:
    data = {
        "baseline": {
            "federal_tax": "100",
            "state_tax": "50",
            "total_tax": "150",
            "taxable_income": "1000",
        },
        "filing_status": "HEAD_OF_HOUSEHOLD",
        "state": "TX",
        "taxable_income_delta": {"low": "0", "base": "0", "high": "0"},
        "qualifying_children_under_17": 0,
    }
    data.update(overrides)
    return data


class TestScenarioRequest:
    """Tests for request validation."""

    def test_camel_case_json(self) -> None:
        """camelCase JSON validates into typed fields."""
        request = ScenarioRequest.model_validate_json(PAYLOAD)

        assert request.filing_status is FilingStatus.SINGLE
        assert request.state == "CO"
        assert request.baseline.total_tax == Decimal("90000")
        assert request.taxable_income_delta.to_range() == Range.of(-50000, -30000, -10000)
        assert request.agi_override is None

    def test_snake_case_accepted(self) -> None:
        """Field names are accepted alongside aliases."""
        request = ScenarioRequest.model_validate(_request_dict())
        assert request.qualifying_children_under_17 == 0
        assert request.baseline.to_totals() == Totals.from_components(100, 50, 1000)

    def test_missing_children_count_rejected(self) -> None:
        """The child count is required; a missing count is not read as zero."""
        data = _request_dict()
        del data["qualifying_children_under_17"]
        with pytest.raises(ValidationError, match="qualifying"):
            ScenarioRequest.model_validate(data)

    def test_extra_key_rejected(self) -> None:
        """Unknown keys fail validation."""
        with pytest.raises(ValidationError):
            ScenarioRequest.model_validate(_request_dict(payroll_tax="10"))

    def test_unreconciled_baseline_rejected(self) -> None:
        """A total that is not federal + state fails validation."""
        baseline = {
            "federal_tax": "100",
            "state_tax": "50",
            "total_tax": "151",
            "taxable_income": "1000",
        }
        with pytest.raises(ValidationError, match="total_tax must equal"):
            ScenarioRequest.model_validate(_request_dict(baseline=baseline))

    def test_negative_children_rejected(self) -> None:
        """Child counts below zero are rejected at the boundary."""
        with pytest.raises(ValidationError):
            ScenarioRequest.model_validate(_request_dict(qualifying_children_under_17=-1))

    @pytest.mark.parametrize("bad", ["Infinity", "NaN"])
    def test_non_finite_amount_rejected(self, bad: str) -> None:
        """Infinite and NaN amounts are rejected."""
        delta = {"low": bad, "base": "0", "high": "0"}
        with pytest.raises(ValidationError):
            ScenarioRequest.model_validate(_request_dict(taxable_income_delta=delta))

    @pytest.mark.parametrize("bad", ["C", "COL", "C1"])
    def test_malformed_state_rejected(self, bad: str) -> None:
        """State codes must be two letters."""
        with pytest.raises(ValidationError):
            ScenarioRequest.model_validate(_request_dict(state=bad))

    def test_unknown_filing_status_rejected(self) -> None:
        """Filing status must be one of the intake codes."""
        with pytest.raises(ValidationError):
            ScenarioRequest.model_validate(_request_dict(filing_status="WIDOW"))

    def test_frozen(self) -> None:
        """Requests cannot be modified after validation."""
        request = ScenarioRequest.model_validate(_request_dict())
        with pytest.raises(ValidationError):
            request.state = "CA"


def test_request_matches_direct_call(flat_federal, flat_state) -> None:
    """Running from a request equals calling recompute_scenario directly."""
    request = ScenarioRequest.model_validate_json(PAYLOAD)
    from_request = recompute_scenario_from_request(
        request, federal_service=flat_federal, state_service=flat_state
    )

    direct = recompute_scenario(
        Totals.from_components(70000, 20000, 400000),
        "SINGLE",
        "CO",
        Range.of(-50000, -30000, -10000),
        0,
        federal_service=flat_federal,
        state_service=flat_state,
    )

    assert from_request == direct
    assert from_request.total_tax_delta.base == Decimal("6750.00")


def test_session_id_bound_during_recompute(flat_federal, flat_state) -> None:
    """The request's session ID is visible to logging during the call only."""
    seen: list[str | None] = []
    record_federal = flat_federal.compute_federal_baseline

    def compute_federal_baseline(**kwargs):
        seen.append(session_id_ctx.get())
        return record_federal(**kwargs)

    flat_federal.compute_federal_baseline = compute_federal_baseline
    request = ScenarioRequest.model_validate(_request_dict(session_id="sess-7"))

    recompute_scenario_from_request(
        request, federal_service=flat_federal, state_service=flat_state
    )

    assert seen == ["sess-7", "sess-7", "sess-7"]
    assert session_id_ctx.get() is None


def test_session_id_reset_after_failure(flat_federal, failing_state_factory) -> None:
    """The session ID is unbound even when the recomputation fails."""
    request = ScenarioRequest.model_validate(_request_dict(session_id="sess-8"))
    with pytest.raises(ComputationError):
        recompute_scenario_from_request(
            request,
            federal_service=flat_federal,
            state_service=failing_state_factory(limit=Decimal("-1")),
        )
    assert session_id_ctx.get() is None
