"""Password hashing and session token helpers"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from jose import JWTError, jwt

from venue_ledger.config import settings
from venue_ledger.domain.exceptions import AuthorizationError

ROLE_ACCOUNT = "account"
ROLE_ADMIN = "admin"


@dataclass(frozen=True)
class SessionClaims:
    """Capability carried by a session token"""

    subject: str  # account_id, or admin username
    role: str


def hash_password(password: str) -> str:
    """Hash plain text password using bcrypt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain text password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        return False


def create_access_token(subject: str, role: str, expires_delta: Optional[timedelta] = None) -> str:
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    payload = {"sub": subject, "role": role, "exp": expire}
    return jwt.encode(payload, settings.secret_key, algorithm=settings.token_algorithm)


def decode_access_token(token: str) -> SessionClaims:
    """
    Validate a session token and return its claims.

    Raises:
        AuthorizationError: Bad signature, expired, or missing claims
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.token_algorithm])
    except JWTError as e:
        raise AuthorizationError("Invalid or expired session token") from e

    subject = payload.get("sub")
    role = payload.get("role")
    if not subject or role not in {ROLE_ACCOUNT, ROLE_ADMIN}:
        raise AuthorizationError("Session token is missing claims")
    return SessionClaims(subject=subject, role=role)
