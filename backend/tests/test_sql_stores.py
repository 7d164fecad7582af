from sqlalchemy import event
from sqlalchemy.exc import OperationalError

from idv.models.user import User
from idv.models.verification import VerificationAttempt
from idv.repositories.sql import SqlAttemptLogStore, SqlSourceRecordStore
from idv.services.verification_service import VerificationOrchestrator
from idv.services.verification_trace import SourceStatus


def test_failed_lookup_rolls_back_and_next_source_still_matches(engine, seeded_db):
    admin = seeded_db.query(User).filter(User.username == "admin").first()

    def fail_inris_lookup(conn, cursor, statement, parameters, context, executemany):
        if "id_source_clients" in statement and "INRIS" in (parameters or ()):
            raise OperationalError(statement, parameters, Exception("INRIS unavailable"))

    event.listen(engine, "before_cursor_execute", fail_inris_lookup)
    try:
        orchestrator = VerificationOrchestrator(SqlSourceRecordStore(seeded_db), SqlAttemptLogStore(seeded_db))
        result = orchestrator.search_with_progress("19750418/08/1", admin.user_id)
    finally:
        event.remove(engine, "before_cursor_execute", fail_inris_lookup)

    assert result.success
    assert result.source_results[0].source_name == "INRIS"
    assert result.source_results[0].status is SourceStatus.ERROR
    assert result.source_results[1].source_name == "ZRA"
    assert result.source_results[1].status is SourceStatus.FOUND
    assert result.final_result.full_name == "Peter Phiri"

    attempts = seeded_db.query(VerificationAttempt).all()
    assert len(attempts) == 1
    assert attempts[0].source_system == "ZRA"
    assert attempts[0].result_count == 1
