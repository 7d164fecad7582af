"""
Store contracts consumed by the verification services.
Any object with these methods can stand in for the SQL-backed stores.
"""
from typing import List, Optional, Protocol, Set

from idv.models.source_record import SourceRecord
from idv.models.verification import VerificationAttempt


class SourceRecordStore(Protocol):
    def find_by_id_and_source(self, id_number: str, source: str) -> Optional[SourceRecord]:
        ...

    def search_by_id_number(self, id_number: str) -> List[SourceRecord]:
        ...

    def get_by_id_number(self, id_number: str) -> Optional[SourceRecord]:
        ...

    def list_all(self) -> List[SourceRecord]:
        ...


class AttemptLogStore(Protocol):
    def add(self, attempt: VerificationAttempt) -> VerificationAttempt:
        ...


class RegisteredClientStore(Protocol):
    def list_id_numbers(self) -> Set[str]:
        ...
