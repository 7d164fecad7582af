"""
Auth Service — Credential checks and JWT bearer-token issuance.
"""
import uuid
from datetime import datetime, timedelta, timezone
from typing import Dict, Tuple

import jwt
from sqlalchemy.orm import Session

from idv.config import get_settings
from idv.models.user import User
from idv.utils.hashing import verify_password

settings = get_settings()


class AuthService:
    """Stateless token authentication for back-office users."""

    @staticmethod
    def authenticate(db: Session, username: str, password: str) -> User:
        """Return the active user for the credentials.

        Raises:
            PermissionError: Unknown user, wrong password, or disabled account.
        """
        user = db.query(User).filter(User.username == username).first()
        if not user or not verify_password(password, user.password_hash):
            raise PermissionError("Invalid credentials")
        if not user.is_active:
            raise PermissionError("Account is disabled")
        return user

    @staticmethod
    def issue_token(user: User) -> Tuple[str, datetime]:
        expires_at = datetime.now(timezone.utc) + timedelta(minutes=settings.TOKEN_EXPIRY_MINUTES)
        claims = {
            "sub": user.user_id,
            "name": user.username,
            "email": user.email,
            "role": user.role,
            "iss": settings.JWT_ISSUER,
            "aud": settings.JWT_AUDIENCE,
            "exp": expires_at,
        }
        token = jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
        return token, expires_at

    @staticmethod
    def decode_token(token: str) -> Dict:
        """Validate signature, expiry, issuer and audience.

        Raises:
            jwt.PyJWTError: Any validation failure.
        """
        return jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            issuer=settings.JWT_ISSUER,
        )

    @staticmethod
    def login(db: Session, username: str, password: str) -> Dict:
        user = AuthService.authenticate(db, username, password)

        user.last_login_at = datetime.utcnow()
        db.commit()
        db.refresh(user)

        token, expires_at = AuthService.issue_token(user)
        return {
            "token": token,
            # Refresh is not supported; the value only keeps the client contract.
            "refresh_token": str(uuid.uuid4()),
            "expires_at": expires_at,
            "user": user,
        }
