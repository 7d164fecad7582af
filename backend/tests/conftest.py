import os

# Must be set before idv.config caches its settings.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SIMULATE_LATENCY", "false")
os.environ.setdefault("SEED_ON_STARTUP", "false")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from idv.database import get_db, init_db  # noqa: E402
from idv.dependencies import get_latency_simulator  # noqa: E402
from idv.main import app  # noqa: E402
from idv.seed import seed_database  # noqa: E402
from idv.services.latency import NoLatency  # noqa: E402


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    TestingSession = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = TestingSession()
    yield session
    session.close()


@pytest.fixture
def seeded_db(db):
    seed_database(db)
    return db


@pytest.fixture
def client(seeded_db):
    def override_get_db():
        yield seeded_db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_latency_simulator] = lambda: NoLatency()
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    response = client.post("/api/auth/login", json={"username": "admin", "password": "Admin@123"})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}
