from sqlalchemy.exc import OperationalError

from fakes import FakeAttemptStore, FakeSourceStore
from idv.dependencies import get_single_source_verifier
from idv.main import app
from idv.models.verification import VerificationAttempt
from idv.services.verification_service import SingleSourceVerifier


def attempts(db):
    return db.query(VerificationAttempt).all()


def test_multi_source_found_at_first_source(client, auth_headers, seeded_db):
    response = client.get("/api/verification/multi-source/19850615%2F10%2F1", headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["idNumber"] == "19850615/10/1"
    assert body["overallStatus"] == "Found"
    assert body["finalResult"]["fullName"] == "John Mwanza"

    results = body["sourceResults"]
    assert len(results) == 11
    assert results[0]["sourceName"] == "INRIS"
    assert results[0]["status"] == "Found"
    assert results[0]["isFound"] is True
    assert {r["status"] for r in results[1:]} == {"Skipped"}
    assert body["totalResponseTime"] == results[0]["responseTime"]

    logged = attempts(seeded_db)
    assert len(logged) == 1
    assert logged[0].source_system == "INRIS"
    assert logged[0].result_status == "Found"


def test_multi_source_found_further_down(client, auth_headers):
    body = client.get("/api/verification/multi-source/19750418%2F08%2F1", headers=auth_headers).json()

    statuses = [r["status"] for r in body["sourceResults"]]
    assert statuses[:2] == ["NotFound", "Found"]
    assert body["sourceResults"][1]["result"]["fullName"] == "Peter Phiri"
    assert set(statuses[2:]) == {"Skipped"}


def test_multi_source_unknown_id(client, auth_headers, seeded_db):
    body = client.get("/api/verification/multi-source/00000000%2F00%2F0", headers=auth_headers).json()

    assert body["success"] is False
    assert body["overallStatus"] == "NotFound"
    assert body["finalResult"] is None
    assert {r["status"] for r in body["sourceResults"]} == {"NotFound"}

    logged = attempts(seeded_db)
    assert len(logged) == 1
    assert logged[0].result_status == "NotFound"
    assert logged[0].result_count == 0
    assert logged[0].source_system == "Mock_API"


def test_passport_office_is_not_a_registered_source(client, auth_headers):
    body = client.get("/api/verification/multi-source/ZN1234567", headers=auth_headers).json()
    assert body["success"] is False


def test_blank_id_is_bad_request(client, auth_headers):
    assert client.get("/api/verification/multi-source/%20", headers=auth_headers).status_code == 400
    assert client.get("/api/verification/%20", headers=auth_headers).status_code == 400


def test_double_encoded_id_is_decoded(client, auth_headers):
    body = client.get("/api/verification/multi-source/19850615%252F10%252F1", headers=auth_headers).json()
    assert body["success"] is True
    assert body["idNumber"] == "19850615/10/1"


def test_single_source_found(client, auth_headers, seeded_db):
    response = client.get("/api/verification/ZM123456", headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["status"] == "Found"
    assert body["resultCount"] == 1
    assert body["source"] == "Mock External API"
    assert body["results"][0]["fullName"] == "Michael Tembo"
    assert attempts(seeded_db)[0].source_system == "Mock_API"


def test_single_source_partial_match_returns_multiple(client, auth_headers):
    body = client.get("/api/verification/ZN", headers=auth_headers).json()
    assert body["status"] == "Multiple"
    assert body["resultCount"] == 2


def test_single_source_accepts_encoded_slashes(client, auth_headers):
    body = client.get("/api/verification/19930612%2F05%2F1", headers=auth_headers).json()
    assert body["results"][0]["fullName"] == "Grace Tembo"


class FailingStore(FakeSourceStore):
    def search_by_id_number(self, id_number):
        raise OperationalError("SELECT", {}, Exception("disk I/O error"))


def test_single_source_store_failure_is_server_error(client, auth_headers):
    app.dependency_overrides[get_single_source_verifier] = lambda: SingleSourceVerifier(
        FailingStore(), FakeAttemptStore(),
    )
    response = client.get("/api/verification/ZM123456", headers=auth_headers)
    assert response.status_code == 500


def test_available_test_ids(client, auth_headers):
    response = client.get("/api/verification/available-test-ids", headers=auth_headers)

    assert response.status_code == 200
    rows = response.json()
    assert len(rows) == 8
    assert rows == sorted(rows, key=lambda r: (r["source"], r["idNumber"]))
    assert set(rows[0]) == {"idNumber", "fullName", "source", "displaySource"}
