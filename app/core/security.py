"""Password hashing and session token helpers."""
import secrets
from datetime import timedelta
from typing import Any

import bcrypt
from jose import JWTError, jwt

from app.core.clock import utcnow
from app.core.config import settings

ALGORITHM = "HS256"


class InvalidTokenError(Exception):
    """Raised when a session token cannot be decoded or has expired."""


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password with bcrypt (12 rounds)."""
    salt = bcrypt.gensalt(rounds=12)
    return bcrypt.hashpw(plain_password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, password_hash: str | None) -> bool:
    """Check a plain-text password against a stored bcrypt hash."""
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(
            plain_password.encode("utf-8"),
            password_hash.encode("utf-8"),
        )
    except ValueError:
        # Malformed hash in the database
        return False


def generate_token() -> str:
    """Random single-use token for password reset and email verification links."""
    return secrets.token_hex(32)


def create_access_token(
    subject: str,
    expires_delta: timedelta | None = None,
    claims: dict[str, Any] | None = None,
) -> str:
    """Issue a signed session token for the given user id."""
    now = utcnow()
    expire = now + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    payload: dict[str, Any] = {"sub": subject, "exp": expire, "iat": now}
    if claims:
        payload.update(claims)
    return jwt.encode(payload, settings.secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict[str, Any]:
    """Decode and validate a session token."""
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    except JWTError as exc:
        raise InvalidTokenError("Invalid token") from exc
