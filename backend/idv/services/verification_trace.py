"""
Verification Trace — Per-source progress entries for one multi-source search.

Each entry is an immutable value that moves through a small state machine:

    Waiting -> Checking -> Found | NotFound | Error
    Waiting | Checking -> Skipped   (only once a match has stopped the search)

The trace itself is an arena indexed by source rank; advancing an entry
replaces the slot rather than mutating a shared object.
"""
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from idv.schemas.schemas import ClientSearchResult
from idv.services.source_registry import SourceDescriptor


class SourceStatus(str, Enum):
    WAITING = "Waiting"
    CHECKING = "Checking"
    FOUND = "Found"
    NOT_FOUND = "NotFound"
    ERROR = "Error"
    SKIPPED = "Skipped"


_ALLOWED = {
    SourceStatus.WAITING: {SourceStatus.CHECKING, SourceStatus.SKIPPED},
    SourceStatus.CHECKING: {
        SourceStatus.FOUND, SourceStatus.NOT_FOUND, SourceStatus.ERROR, SourceStatus.SKIPPED,
    },
}

SEARCHED_STATUSES = frozenset({SourceStatus.FOUND, SourceStatus.NOT_FOUND, SourceStatus.ERROR})
TERMINAL_STATUSES = SEARCHED_STATUSES | {SourceStatus.SKIPPED}


@dataclass(frozen=True)
class SourceSearchResult:
    source_name: str
    display_name: str
    priority: int
    status: SourceStatus = SourceStatus.WAITING
    response_time_ms: int = 0
    is_found: bool = False
    matched_record: Optional[ClientSearchResult] = None
    error_message: Optional[str] = None

    @classmethod
    def waiting(cls, source: SourceDescriptor) -> "SourceSearchResult":
        return cls(
            source_name=source.source_name,
            display_name=source.display_name,
            priority=source.priority,
        )

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    @property
    def was_searched(self) -> bool:
        return self.status in SEARCHED_STATUSES

    def _advance(self, status: SourceStatus, **changes) -> "SourceSearchResult":
        if status not in _ALLOWED.get(self.status, ()):
            raise ValueError(
                f"Illegal transition for {self.source_name}: {self.status.value} -> {status.value}"
            )
        return replace(self, status=status, **changes)

    def checking(self) -> "SourceSearchResult":
        return self._advance(SourceStatus.CHECKING)

    def found(self, record: ClientSearchResult, response_time_ms: int) -> "SourceSearchResult":
        return self._advance(
            SourceStatus.FOUND,
            response_time_ms=response_time_ms,
            is_found=True,
            matched_record=record,
        )

    def not_found(self, response_time_ms: int) -> "SourceSearchResult":
        return self._advance(SourceStatus.NOT_FOUND, response_time_ms=response_time_ms)

    def error(self, message: str, response_time_ms: int) -> "SourceSearchResult":
        return self._advance(
            SourceStatus.ERROR,
            response_time_ms=response_time_ms,
            error_message=message,
        )

    def skipped(self) -> "SourceSearchResult":
        return self._advance(SourceStatus.SKIPPED, response_time_ms=0)


class SearchTrace:
    """Rank-indexed arena of SourceSearchResult entries."""

    def __init__(self, sources: Iterable[SourceDescriptor]):
        self._entries: List[SourceSearchResult] = [SourceSearchResult.waiting(s) for s in sources]

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, rank: int) -> SourceSearchResult:
        return self._entries[rank]

    def put(self, rank: int, entry: SourceSearchResult) -> None:
        if entry.source_name != self._entries[rank].source_name:
            raise ValueError(f"Entry for {entry.source_name} does not belong at rank {rank}")
        self._entries[rank] = entry

    def skip_unvisited(self) -> None:
        """Close out every entry the search never finished."""
        for rank, entry in enumerate(self._entries):
            if not entry.is_terminal:
                self._entries[rank] = entry.skipped()

    def entries(self) -> Tuple[SourceSearchResult, ...]:
        return tuple(self._entries)

    def searched_time_ms(self) -> int:
        return sum(e.response_time_ms for e in self._entries if e.was_searched)
