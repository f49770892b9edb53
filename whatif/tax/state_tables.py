"""2025 state individual income tax structures (state-level only, no local taxes).

Progressive states use a hybrid estimate rather than full brackets:
tax up to $300,000 at an assumed marginal rate at $300,000, and the excess at
the top marginal rate. Until a state is refined by filing status, the rate at
$300,000 defaults to the top rate, which errs on the conservative side.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class StateFilingStatus(str, Enum):
    """Filing status codes understood by the state computation."""

    SINGLE = "single"
    MFJ = "mfj"
    MFS = "mfs"
    HOH = "hoh"


class StateTaxMethod(str, Enum):
    """How a state's income tax is computed."""

    NONE = "none"
    FLAT = "flat"
    HYBRID_300K = "hybrid_300k_estimate"


HYBRID_THRESHOLD = Decimal("300000")

STATE_TAX_ESTIMATE_DISCLOSURE = (
    "State tax is an estimate for progressive states. Hybrid method: tax up to "
    "$300k at an assumed marginal rate at $300k, then tax above $300k at the top "
    "marginal rate. This does not model state-specific income definitions, "
    "deductions, exemptions, credits, surcharges, or local taxes."
)


@dataclass(frozen=True)
class StateRateStructure:
    """Rate structure for one state.

    Attributes:
        method: Computation method.
        rate: Flat rate (FLAT only).
        rate_at_300k: Assumed marginal rate at $300k per status (HYBRID only).
        top_rate: Top marginal rate per status (HYBRID only).
        note: Optional caveat attached to results.
    """

    method: StateTaxMethod
    rate: Decimal = Decimal("0")
    rate_at_300k: Mapping[StateFilingStatus, Decimal] = field(
        default_factory=lambda: MappingProxyType({})
    )
    top_rate: Mapping[StateFilingStatus, Decimal] = field(
        default_factory=lambda: MappingProxyType({})
    )
    note: str | None = None


def _by_status(rate: Decimal) -> Mapping[StateFilingStatus, Decimal]:
    return MappingProxyType({status: rate for status in StateFilingStatus})


def _hybrid(top_rate: str, note: str | None = None) -> StateRateStructure:
    rate = Decimal(top_rate)
    return StateRateStructure(
        method=StateTaxMethod.HYBRID_300K,
        rate_at_300k=_by_status(rate),
        top_rate=_by_status(rate),
        note=note,
    )


def _flat(rate: str, note: str | None = None) -> StateRateStructure:
    return StateRateStructure(method=StateTaxMethod.FLAT, rate=Decimal(rate), note=note)


def _none(note: str | None = None) -> StateRateStructure:
    return StateRateStructure(method=StateTaxMethod.NONE, note=note)


STATE_RATES_2025: Mapping[str, StateRateStructure] = MappingProxyType(
    {
        # Progressive (hybrid estimate)
        "AL": _hybrid("0.05"),
        "AR": _hybrid("0.039"),
        "CA": _hybrid(
            "0.133",
            "CA is progressive; this uses top rate for both segments as a "
            "conservative estimate.",
        ),
        "CT": _hybrid("0.0699"),
        "DE": _hybrid("0.066"),
        "HI": _hybrid("0.11"),
        "KS": _hybrid("0.0558"),
        "ME": _hybrid("0.0715"),
        "MD": _hybrid(
            "0.0575", "Maryland has local income taxes (not modeled). This is state-only."
        ),
        "MA": _hybrid(
            "0.09",
            "Includes high-income surtax conceptually; modeled here as top rate estimate.",
        ),
        "MN": _hybrid("0.0985"),
        "MO": _hybrid("0.047"),
        "MT": _hybrid("0.059"),
        "NE": _hybrid("0.052"),
        "NJ": _hybrid("0.1075"),
        "NM": _hybrid("0.059"),
        "NY": _hybrid("0.109", "New York City local tax not modeled. This is NYS-only."),
        "ND": _hybrid("0.025"),
        "OH": _hybrid("0.035"),
        "OK": _hybrid("0.0475"),
        "OR": _hybrid("0.099"),
        "RI": _hybrid("0.0599"),
        "SC": _hybrid("0.062"),
        "VT": _hybrid("0.0875"),
        "VA": _hybrid("0.0575"),
        "WV": _hybrid("0.0482"),
        "WI": _hybrid("0.0765"),
        "DC": _hybrid("0.1075"),
        # Flat
        "AZ": _flat("0.025"),
        "CO": _flat("0.044"),
        "GA": _flat("0.0539"),
        "IA": _flat("0.038"),
        "ID": _flat("0.05695"),
        "IL": _flat("0.0495"),
        "IN": _flat("0.03"),
        "KY": _flat("0.04"),
        "LA": _flat("0.03"),
        "MI": _flat("0.0425"),
        "MS": _flat("0.044", "Simplified as flat for baseline estimate."),
        "NC": _flat("0.0425"),
        "PA": _flat("0.0307"),
        "UT": _flat("0.0455"),
        # No broad wage income tax
        "AK": _none(),
        "FL": _none(),
        "NV": _none(),
        "NH": _none("No wage income tax (interest/dividends not modeled)."),
        "SD": _none(),
        "TN": _none(),
        "TX": _none(),
        "WA": _none("No wage income tax (capital gains tax not modeled)."),
        "WY": _none(),
    }
)

STATE_RATE_TABLES: Mapping[int, Mapping[str, StateRateStructure]] = MappingProxyType(
    {2025: STATE_RATES_2025}
)
