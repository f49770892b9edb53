"""Reference federal and state tax collaborators and year configurations."""

from whatif.tax.federal import (
    FederalTaxResult,
    ReferenceFederalTaxService,
    compute_bracket_tax,
)
from whatif.tax.state import ReferenceStateTaxService, StateTaxResult, as_state_code
from whatif.tax.state_tables import StateFilingStatus, StateTaxMethod
from whatif.tax.year_config import (
    TAX_YEAR_2025,
    TAX_YEAR_CONFIGS,
    FederalFilingStatus,
    TaxYearConfig,
    get_tax_year_config,
)

__all__ = [
    # Federal
    "FederalFilingStatus",
    "FederalTaxResult",
    "ReferenceFederalTaxService",
    "compute_bracket_tax",
    # State
    "StateFilingStatus",
    "StateTaxMethod",
    "StateTaxResult",
    "ReferenceStateTaxService",
    "as_state_code",
    # Year configuration
    "TaxYearConfig",
    "TAX_YEAR_2025",
    "TAX_YEAR_CONFIGS",
    "get_tax_year_config",
]
