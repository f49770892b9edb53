"""Translation of intake filing status codes to federal and state codes.

Intake uses upper-case codes; the tax computations use their own short codes.
The federal and state tables are kept separate so a jurisdiction can diverge
in naming without touching the other.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from whatif.core.errors import ConfigurationError
from whatif.scenarios.models import FilingStatus
from whatif.tax.state_tables import StateFilingStatus
from whatif.tax.year_config import FederalFilingStatus

FEDERAL_STATUS_MAP: Mapping[FilingStatus, FederalFilingStatus] = MappingProxyType(
    {
        FilingStatus.SINGLE: FederalFilingStatus.SINGLE,
        FilingStatus.MARRIED_FILING_JOINTLY: FederalFilingStatus.MFJ,
        FilingStatus.MARRIED_FILING_SEPARATELY: FederalFilingStatus.MFS,
        FilingStatus.HEAD_OF_HOUSEHOLD: FederalFilingStatus.HOH,
    }
)

STATE_STATUS_MAP: Mapping[FilingStatus, StateFilingStatus] = MappingProxyType(
    {
        FilingStatus.SINGLE: StateFilingStatus.SINGLE,
        FilingStatus.MARRIED_FILING_JOINTLY: StateFilingStatus.MFJ,
        FilingStatus.MARRIED_FILING_SEPARATELY: StateFilingStatus.MFS,
        FilingStatus.HEAD_OF_HOUSEHOLD: StateFilingStatus.HOH,
    }
)


@dataclass(frozen=True)
class NormalizedFilingStatus:
    """An intake filing status with its federal and state equivalents."""

    intake: FilingStatus
    federal: FederalFilingStatus
    state: StateFilingStatus


def normalize_filing_status(code: FilingStatus | str) -> NormalizedFilingStatus:
    """Map an intake filing status to federal and state codes.

    Args:
        code: A FilingStatus or its string value (e.g. "SINGLE").

    Returns:
        NormalizedFilingStatus with both jurisdiction codes.

    Raises:
        ConfigurationError: If the code is not one of the four intake values.

    Example:
        >>> normalize_filing_status("HEAD_OF_HOUSEHOLD").federal
        <FederalFilingStatus.HOH: 'hoh'>
    """
    try:
        intake = FilingStatus(code)
    except ValueError as exc:
        raise ConfigurationError(f"Unrecognized filing status: {code!r}") from exc

    return NormalizedFilingStatus(
        intake=intake,
        federal=FEDERAL_STATUS_MAP[intake],
        state=STATE_STATUS_MAP[intake],
    )
