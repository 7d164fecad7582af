"""
Password Hashing Utilities — bcrypt through passlib's CryptContext.
"""
from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed_password: str | None) -> bool:
    """Check a password against a stored hash; unknown or empty hashes never match."""
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(password, hashed_password)
    except ValueError:
        # passlib raises for strings it cannot identify as a supported hash
        return False
