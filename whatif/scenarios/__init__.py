"""Scenario recomputation module.

Recomputes federal, state and total tax under low/base/high changes to
taxable income, against an immutable baseline.

Components:
- Filing status normalization (intake -> federal/state codes)
- Baseline AGI derivation with an explicit override
- Range propagation clamped to non-negative amounts
- Scenario evaluation through pluggable tax collaborators
- Delta assembly against the baseline
"""

from whatif.scenarios.agi import derive_baseline_agi
from whatif.scenarios.engine import assemble_deltas, compute_baseline, recompute_scenario
from whatif.scenarios.evaluator import (
    FederalTaxService,
    ScenarioTaxEvaluator,
    StateTaxService,
)
from whatif.scenarios.filing_status import (
    NormalizedFilingStatus,
    normalize_filing_status,
)
from whatif.scenarios.models import (
    AgiBasis,
    AgiSource,
    FilingStatus,
    Range,
    ScenarioResult,
    Totals,
)
from whatif.scenarios.ranges import propagate_range
from whatif.scenarios.schemas import ScenarioRequest, recompute_scenario_from_request

__all__ = [
    # Entry points
    "recompute_scenario",
    "recompute_scenario_from_request",
    "compute_baseline",
    # Data structures
    "FilingStatus",
    "Range",
    "Totals",
    "AgiBasis",
    "AgiSource",
    "ScenarioResult",
    "ScenarioRequest",
    "NormalizedFilingStatus",
    # Components
    "normalize_filing_status",
    "derive_baseline_agi",
    "propagate_range",
    "ScenarioTaxEvaluator",
    "assemble_deltas",
    # Collaborator contracts
    "FederalTaxService",
    "StateTaxService",
]
