"""
SQLAlchemy implementations of the store contracts.
"""
from typing import List, Optional, Set

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from idv.models.client import RegisteredClient
from idv.models.source_record import SourceRecord
from idv.models.verification import VerificationAttempt


class SqlSourceRecordStore:
    """Read-only access to the mock identity sources."""

    def __init__(self, db: Session):
        self.db = db

    def find_by_id_and_source(self, id_number: str, source: str) -> Optional[SourceRecord]:
        try:
            return (
                self.db.query(SourceRecord)
                .filter(SourceRecord.id_number == id_number, SourceRecord.source == source)
                .first()
            )
        except SQLAlchemyError:
            # Leave the session usable for the next source lookup.
            self.db.rollback()
            raise

    def search_by_id_number(self, id_number: str) -> List[SourceRecord]:
        return (
            self.db.query(SourceRecord)
            .filter(SourceRecord.id_number.contains(id_number, autoescape=True))
            .all()
        )

    def get_by_id_number(self, id_number: str) -> Optional[SourceRecord]:
        return self.db.query(SourceRecord).filter(SourceRecord.id_number == id_number).first()

    def list_all(self) -> List[SourceRecord]:
        return (
            self.db.query(SourceRecord)
            .order_by(SourceRecord.created_at.asc(), SourceRecord.id_number.asc())
            .all()
        )


class SqlAttemptLogStore:
    """Append-only verification attempt log."""

    def __init__(self, db: Session):
        self.db = db

    def add(self, attempt: VerificationAttempt) -> VerificationAttempt:
        self.db.add(attempt)
        self.db.commit()
        self.db.refresh(attempt)
        return attempt


class SqlRegisteredClientStore:
    def __init__(self, db: Session):
        self.db = db

    def list_id_numbers(self) -> Set[str]:
        return {row[0] for row in self.db.query(RegisteredClient.id_number).all()}
