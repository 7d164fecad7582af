"""
Source Registry — The fixed, prioritized list of mock verification sources.
"""
from dataclasses import dataclass
from typing import Iterable, Tuple


@dataclass(frozen=True)
class SourceDescriptor:
    """One configured search target. Lower priority is searched first."""

    source_name: str
    display_name: str
    priority: int
    min_delay_ms: int = 0
    max_delay_ms: int = 0


DEFAULT_SOURCES: Tuple[SourceDescriptor, ...] = (
    SourceDescriptor("INRIS", "ID Registration Information System", 1, 200, 500),
    SourceDescriptor("ZRA", "Zambia Revenue Authority", 2, 300, 800),
    SourceDescriptor("MNO_AIRTEL", "Airtel Network Database", 3, 150, 400),
    SourceDescriptor("MNO_MTN", "MTN Network Database", 4, 180, 450),
    SourceDescriptor("MNO_ZAMTEL", "Zamtel Network Database", 5, 200, 500),
    SourceDescriptor("BANK_ZANACO", "Zanaco Banking Records", 6, 400, 900),
    SourceDescriptor("BANK_FNB", "FNB Banking Records", 7, 350, 750),
    SourceDescriptor("BANK_STANCHART", "Standard Chartered Records", 8, 450, 1000),
    SourceDescriptor("GOVT_PAYROLL", "Government Payroll System", 9, 600, 1200),
    SourceDescriptor("NAPSA", "National Pension Scheme Authority", 10, 500, 1000),
    SourceDescriptor("RTSA", "Road Transport & Safety Agency", 11, 400, 800),
)

# Short labels for the test-ID picker; sources outside the registry included.
SHORT_DISPLAY_NAMES = {
    "Standard_Bank": "Standard Bank",
    "PASSPORT_OFFICE": "Passport Office",
    "RTSA": "Road Transport & Safety Agency",
}

# Source keys as expected by the point-of-sale (EPOS) integration.
EPOS_SOURCE_NAMES = {
    "MNO_AIRTEL": "airtel_network",
    "MNO_MTN": "mtn_network",
    "MNO_ZAMTEL": "zamtel_network",
    "BANK_ZANACO": "zanaco_banking",
    "BANK_FNB": "fnb_banking",
    "BANK_STANCHART": "stanchart_banking",
    "INRIS": "national_registry",
    "ZRA": "revenue_authority",
    "GOVT_PAYROLL": "government_payroll",
    "NAPSA": "pension_authority",
    "RTSA": "transport_authority",
}


class SourceRegistry:
    """Immutable, priority-ordered collection of SourceDescriptors."""

    def __init__(self, sources: Iterable[SourceDescriptor] = DEFAULT_SOURCES):
        ordered = tuple(sorted(sources, key=lambda s: s.priority))

        priorities = [s.priority for s in ordered]
        if len(set(priorities)) != len(priorities):
            raise ValueError("Source priorities must be distinct")
        names = [s.source_name for s in ordered]
        if len(set(names)) != len(names):
            raise ValueError("Source names must be unique")

        self._sources = ordered

    def list_sources_by_priority(self) -> Tuple[SourceDescriptor, ...]:
        return self._sources

    def __len__(self) -> int:
        return len(self._sources)


def short_display_name(source_name: str) -> str:
    return SHORT_DISPLAY_NAMES.get(source_name, source_name)


def epos_source_name(source_name: str | None) -> str:
    if not source_name:
        return "id_system"
    return EPOS_SOURCE_NAMES.get(source_name, "id_system")
