import pytest

from idv.services.source_registry import SourceDescriptor
from idv.services.verification_trace import SearchTrace, SourceSearchResult, SourceStatus

SOURCES = (
    SourceDescriptor("INRIS", "ID Registration Information System", 1),
    SourceDescriptor("ZRA", "Zambia Revenue Authority", 2),
    SourceDescriptor("MNO_AIRTEL", "Airtel Network Database", 3),
)


def test_entries_start_waiting():
    trace = SearchTrace(SOURCES)
    assert len(trace) == 3
    assert all(e.status is SourceStatus.WAITING for e in trace.entries())
    assert [e.priority for e in trace.entries()] == [1, 2, 3]


def test_transitions_return_new_values():
    waiting = SourceSearchResult.waiting(SOURCES[0])
    checking = waiting.checking()
    done = checking.not_found(42)

    assert waiting.status is SourceStatus.WAITING
    assert checking.status is SourceStatus.CHECKING
    assert done.status is SourceStatus.NOT_FOUND
    assert done.response_time_ms == 42
    assert done.was_searched and done.is_terminal


def test_error_entry_keeps_message():
    entry = SourceSearchResult.waiting(SOURCES[0]).checking().error("timeout", 7)
    assert entry.status is SourceStatus.ERROR
    assert entry.error_message == "timeout"
    assert not entry.is_found


@pytest.mark.parametrize("advance", [
    lambda e: e.not_found(1),
    lambda e: e.found(None, 1),
    lambda e: e.error("x", 1),
])
def test_waiting_cannot_finish_without_checking(advance):
    with pytest.raises(ValueError):
        advance(SourceSearchResult.waiting(SOURCES[0]))


def test_terminal_entries_cannot_move():
    done = SourceSearchResult.waiting(SOURCES[0]).checking().not_found(1)
    with pytest.raises(ValueError):
        done.checking()
    with pytest.raises(ValueError):
        done.skipped()


def test_skip_unvisited_only_touches_open_entries():
    trace = SearchTrace(SOURCES)
    trace.put(0, trace[0].checking().not_found(10))
    trace.put(1, trace[1].checking())
    trace.skip_unvisited()

    statuses = [e.status for e in trace.entries()]
    assert statuses == [SourceStatus.NOT_FOUND, SourceStatus.SKIPPED, SourceStatus.SKIPPED]
    assert trace.searched_time_ms() == 10


def test_put_rejects_entry_for_other_rank():
    trace = SearchTrace(SOURCES)
    with pytest.raises(ValueError):
        trace.put(0, trace[1].checking())
