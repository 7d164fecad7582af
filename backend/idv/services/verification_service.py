"""
Verification Service — Identity search across the mock external sources.

Two entry points share the same stores:
- VerificationOrchestrator: prioritized, short-circuiting, per-source search
  that tolerates individual source failures.
- SingleSourceVerifier: one bulk substring search, errors propagate.
"""
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, List, Optional, Tuple

from idv.models.source_record import SourceRecord
from idv.models.verification import VerificationAttempt
from idv.repositories.contracts import AttemptLogStore, RegisteredClientStore, SourceRecordStore
from idv.schemas.schemas import AvailableTestId, ClientSearchResult
from idv.services.latency import LatencySimulator, NoLatency
from idv.services.source_registry import SourceRegistry, short_display_name
from idv.services.verification_trace import SearchTrace, SourceSearchResult

logger = logging.getLogger(__name__)

# source_system written when no single source produced the result
AGGREGATE_SOURCE = "Mock_API"
AGGREGATE_SOURCE_LABEL = "Mock External API"
AGGREGATE_DELAY_MS = (200, 500)


class AttemptStatus(str, Enum):
    FOUND = "Found"
    NOT_FOUND = "NotFound"
    MULTIPLE = "Multiple"
    ERROR = "Error"


@dataclass(frozen=True)
class MultiSourceVerificationResult:
    success: bool
    id_number: str
    source_results: Tuple[SourceSearchResult, ...]
    final_result: Optional[ClientSearchResult]
    total_response_time_ms: int
    overall_status: str


@dataclass(frozen=True)
class VerificationSummary:
    success: bool
    status: str
    result_count: int
    response_time_ms: int
    source: str = AGGREGATE_SOURCE_LABEL
    matches: List[ClientSearchResult] = field(default_factory=list)
    error_message: Optional[str] = None


def project_record(record: SourceRecord) -> ClientSearchResult:
    """Project a stored source record into its API shape."""
    return ClientSearchResult(
        client_id=record.record_id,
        id_type=record.id_type,
        id_number=record.id_number,
        full_name=record.full_name,
        date_of_birth=record.date_of_birth,
        gender=record.gender or "",
        mobile_number=record.mobile_number or "",
        province=record.province or "",
        district=record.district or "",
        postal_code=record.postal_code or "",
        source=record.source,
        is_verified=bool(record.is_verified),
    )


def log_verification_attempt(
    store: AttemptLogStore,
    user_id: str,
    id_number: str,
    result_status: AttemptStatus,
    result_count: int,
    response_time_ms: int,
    source_system: str,
) -> VerificationAttempt:
    attempt = VerificationAttempt(
        user_id=user_id,
        id_number=id_number,
        result_status=result_status.value,
        result_count=result_count,
        response_time_ms=max(0, response_time_ms),
        source_system=source_system,
        search_timestamp=datetime.utcnow(),
    )
    return store.add(attempt)


def _elapsed_ms(clock: Callable[[], float], start: float) -> int:
    return max(0, int(round((clock() - start) * 1000)))


class VerificationOrchestrator:
    """Searches sources one at a time in priority order, stopping at the first match."""

    def __init__(
        self,
        source_store: SourceRecordStore,
        attempt_store: AttemptLogStore,
        registry: Optional[SourceRegistry] = None,
        latency: Optional[LatencySimulator] = None,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self.source_store = source_store
        self.attempt_store = attempt_store
        self.registry = registry or SourceRegistry()
        self.latency = latency or NoLatency()
        self.clock = clock

    def search_with_progress(self, id_number: str, user_id: str) -> MultiSourceVerificationResult:
        """Run the prioritized search and return the full per-source trace.

        Args:
            id_number: Already URL-decoded ID number, non-empty.
            user_id: The user running the search (recorded on the attempt).

        Returns:
            MultiSourceVerificationResult. Exactly one VerificationAttempt is
            written per call: Found at the matching source, or a single
            NotFound tagged with the aggregate source.
        """
        if not id_number:
            raise ValueError("id_number must be a non-empty string")

        sources = self.registry.list_sources_by_priority()
        trace = SearchTrace(sources)
        found: Optional[ClientSearchResult] = None

        for rank, source in enumerate(sources):
            entry = trace[rank].checking()
            trace.put(rank, entry)

            start = self.clock()
            try:
                self.latency.pause(source.min_delay_ms, source.max_delay_ms)
                record = self.source_store.find_by_id_and_source(id_number, source.source_name)
            except Exception as exc:
                elapsed = _elapsed_ms(self.clock, start)
                logger.warning("Source %s lookup failed for %s: %s", source.source_name, id_number, exc)
                trace.put(rank, entry.error(str(exc) or exc.__class__.__name__, elapsed))
                continue

            elapsed = _elapsed_ms(self.clock, start)

            if record is None:
                trace.put(rank, entry.not_found(elapsed))
                continue

            found = project_record(record)
            trace.put(rank, entry.found(found, elapsed))
            log_verification_attempt(
                self.attempt_store, user_id, id_number,
                AttemptStatus.FOUND, 1, elapsed, source.source_name,
            )
            logger.info("ID %s found at %s after %d source(s)", id_number, source.source_name, rank + 1)
            break

        total_response_time = trace.searched_time_ms()

        if found is None:
            log_verification_attempt(
                self.attempt_store, user_id, id_number,
                AttemptStatus.NOT_FOUND, 0, total_response_time, AGGREGATE_SOURCE,
            )
            logger.info("ID %s not found in any of %d source(s)", id_number, len(sources))

        trace.skip_unvisited()

        return MultiSourceVerificationResult(
            success=found is not None,
            id_number=id_number,
            source_results=trace.entries(),
            final_result=found,
            total_response_time_ms=total_response_time,
            overall_status=AttemptStatus.FOUND.value if found else AttemptStatus.NOT_FOUND.value,
        )


class SingleSourceVerifier:
    """Legacy path: one substring search across every source at once."""

    def __init__(
        self,
        source_store: SourceRecordStore,
        attempt_store: AttemptLogStore,
        latency: Optional[LatencySimulator] = None,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self.source_store = source_store
        self.attempt_store = attempt_store
        self.latency = latency or NoLatency()
        self.clock = clock

    def verify(self, id_number: str, user_id: str) -> VerificationSummary:
        start = self.clock()
        self.latency.pause(*AGGREGATE_DELAY_MS)

        records = self.source_store.search_by_id_number(id_number)
        response_time = _elapsed_ms(self.clock, start)

        count = len(records)
        if count == 0:
            status = AttemptStatus.NOT_FOUND
        elif count == 1:
            status = AttemptStatus.FOUND
        else:
            status = AttemptStatus.MULTIPLE

        log_verification_attempt(
            self.attempt_store, user_id, id_number,
            status, count, response_time, AGGREGATE_SOURCE,
        )

        return VerificationSummary(
            success=count > 0,
            status=status.value,
            result_count=count,
            response_time_ms=response_time,
            matches=[project_record(r) for r in records],
        )


def list_available_test_ids(
    source_store: SourceRecordStore,
    client_store: RegisteredClientStore,
    limit: int = 8,
) -> List[AvailableTestId]:
    """Sample unregistered source records, one per (id_type, source) pair."""
    if limit <= 0:
        return []
    registered = client_store.list_id_numbers()

    picked: dict = {}
    for record in source_store.list_all():
        if record.id_number in registered:
            continue
        key = (record.id_type, record.source)
        if key not in picked:
            picked[key] = record
        if len(picked) >= limit:
            break

    rows = [
        AvailableTestId(
            id_number=r.id_number,
            full_name=r.full_name,
            source=r.source,
            display_source=short_display_name(r.source),
        )
        for r in picked.values()
    ]
    return sorted(rows, key=lambda r: (r.source, r.id_number))
