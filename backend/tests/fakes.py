"""In-memory stand-ins for the verification stores and clock."""
from idv.models.source_record import SourceRecord


class StepClock:
    """Deterministic perf_counter stand-in: advances by `step` seconds per call."""

    def __init__(self, step: float = 0.01):
        self.step = step
        self.now = 0.0

    def __call__(self) -> float:
        self.now += self.step
        return self.now


class FakeSourceStore:
    """In-memory SourceRecordStore keyed by (id_number, source)."""

    def __init__(self, records=(), failing_sources=()):
        self.records = list(records)
        self.failing_sources = set(failing_sources)
        self.lookups = []

    def find_by_id_and_source(self, id_number, source):
        self.lookups.append(source)
        if source in self.failing_sources:
            raise RuntimeError(f"{source} unavailable")
        for r in self.records:
            if r.id_number == id_number and r.source == source:
                return r
        return None

    def search_by_id_number(self, id_number):
        return [r for r in self.records if id_number in r.id_number]

    def get_by_id_number(self, id_number):
        return next((r for r in self.records if r.id_number == id_number), None)

    def list_all(self):
        return list(self.records)


class FakeAttemptStore:
    def __init__(self):
        self.attempts = []

    def add(self, attempt):
        self.attempts.append(attempt)
        return attempt


class FakeClientStore:
    def __init__(self, id_numbers=()):
        self.id_numbers = set(id_numbers)

    def list_id_numbers(self):
        return set(self.id_numbers)


def make_record(id_number, source, full_name="Test Person", id_type="NationalID", record_id=None):
    return SourceRecord(
        record_id=record_id or f"{source}-{id_number}",
        id_type=id_type,
        id_number=id_number,
        full_name=full_name,
        source=source,
        is_verified=True,
    )
