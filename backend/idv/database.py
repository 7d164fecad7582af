"""
Database Engine & Session Management
SQLAlchemy setup with dependency injection for FastAPI.
"""
import os
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from idv.config import get_settings

settings = get_settings()

# Ensure data directory exists for file-backed SQLite
if settings.DATABASE_URL.startswith("sqlite:///"):
    _db_dir = os.path.dirname(settings.DATABASE_URL.replace("sqlite:///", ""))
    if _db_dir:
        os.makedirs(_db_dir, exist_ok=True)

_connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
    settings.DATABASE_URL,
    connect_args=_connect_args,  # Required for SQLite
    echo=settings.DEBUG,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """FastAPI dependency: yields a database session, auto-closes on finish."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    """Create all tables. Called once at application startup."""
    from idv.models import user as _user_model                  # noqa: F401
    from idv.models import source_record as _source_model       # noqa: F401
    from idv.models import client as _client_model              # noqa: F401
    from idv.models import product as _product_model            # noqa: F401
    from idv.models import verification as _verification_model  # noqa: F401
    from idv.models import audit as _audit_model                # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
