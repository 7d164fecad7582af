"""
Shared FastAPI dependencies — bearer-token user resolution and the
verification services wired to the request's database session.
"""
import logging

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from idv.config import get_settings
from idv.database import get_db
from idv.models.user import User
from idv.repositories.sql import SqlAttemptLogStore, SqlSourceRecordStore
from idv.services.auth_service import AuthService
from idv.services.latency import LatencySimulator, NoLatency, RandomLatency
from idv.services.source_registry import SourceRegistry
from idv.services.verification_service import SingleSourceVerifier, VerificationOrchestrator

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

_registry = SourceRegistry()


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the bearer token to an active user or fail with 401."""
    if credentials is None:
        raise _unauthorized("Not authenticated")

    try:
        claims = AuthService.decode_token(credentials.credentials)
    except jwt.ExpiredSignatureError:
        raise _unauthorized("Token has expired")
    except jwt.PyJWTError as e:
        logger.info("Rejected bearer token: %s", e)
        raise _unauthorized("Invalid token")

    user = db.query(User).filter(User.user_id == claims.get("sub")).first()
    if not user or not user.is_active:
        raise _unauthorized("User not found or disabled")
    return user


def get_source_registry() -> SourceRegistry:
    return _registry


def get_latency_simulator() -> LatencySimulator:
    return RandomLatency() if get_settings().SIMULATE_LATENCY else NoLatency()


def get_orchestrator(
    db: Session = Depends(get_db),
    registry: SourceRegistry = Depends(get_source_registry),
    latency: LatencySimulator = Depends(get_latency_simulator),
) -> VerificationOrchestrator:
    return VerificationOrchestrator(
        SqlSourceRecordStore(db), SqlAttemptLogStore(db), registry=registry, latency=latency,
    )


def get_single_source_verifier(
    db: Session = Depends(get_db),
    latency: LatencySimulator = Depends(get_latency_simulator),
) -> SingleSourceVerifier:
    return SingleSourceVerifier(SqlSourceRecordStore(db), SqlAttemptLogStore(db), latency=latency)
