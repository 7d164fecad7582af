"""
Auth Routes — Login, logout and current-user lookup.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from idv.database import get_db
from idv.dependencies import get_current_user
from idv.models.user import User
from idv.schemas.schemas import LoginRequest, LoginResponse, MessageResponse, UserOut
from idv.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    """Exchange username/password for a bearer token."""
    try:
        result = AuthService.login(db, payload.username, payload.password)
    except PermissionError as e:
        logger.info("Failed login for %s: %s", payload.username, e)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))

    return LoginResponse(
        token=result["token"],
        refresh_token=result["refresh_token"],
        expires_at=result["expires_at"],
        user=UserOut.model_validate(result["user"]),
    )


@router.post("/logout", response_model=MessageResponse)
def logout(current_user: User = Depends(get_current_user)):
    # Tokens are stateless; the client simply discards its copy.
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=UserOut)
def me(current_user: User = Depends(get_current_user)):
    return UserOut.model_validate(current_user)
