"""
Security utilities.

Password hashing and JWT access token creation/validation.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

import bcrypt as _bcrypt
from jose import JWTError, jwt

from petadopt.core.config import settings


# ---------------------------------------------------------------------------
# Password hashing
# ---------------------------------------------------------------------------

def hash_password(password: str) -> str:
    """Hash a plaintext password using bcrypt."""
    password_bytes = password.encode("utf-8")[:72]
    salt = _bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return _bcrypt.hashpw(password_bytes, salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plaintext password against a bcrypt hash."""
    password_bytes = plain_password.encode("utf-8")[:72]
    try:
        return _bcrypt.checkpw(password_bytes, hashed_password.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


# ---------------------------------------------------------------------------
# JWT tokens
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Identity:
    """The organization a verified access token speaks for."""

    org_id: UUID
    email: str


def create_access_token(org_id: UUID | str, email: str) -> str:
    """
    Create a signed access token for an organization.

    Args:
        org_id: The organization's UUID.
        email: The organization's login email.

    Returns:
        Signed JWT string, valid for JWT_ACCESS_TOKEN_EXPIRE_HOURS.
    """
    now = datetime.now(UTC)
    expire = now + timedelta(hours=settings.JWT_ACCESS_TOKEN_EXPIRE_HOURS)
    payload: dict[str, Any] = {
        "sub": str(org_id),
        "email": email,
        "type": "access",
        "iat": now,
        "exp": expire,
    }
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict[str, Any]:
    """
    Decode and validate a JWT token.

    Raises:
        JWTError: If the token is invalid, expired, or tampered.
    """
    return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])


def verify_access_token(token: str) -> Identity:
    """
    Verify an access token and return the identity it carries.

    Raises:
        JWTError: If the signature, expiry, type or subject is invalid.
    """
    payload = decode_token(token)
    if payload.get("type") != "access":
        raise JWTError("Not an access token")

    try:
        org_id = UUID(str(payload.get("sub", "")))
    except ValueError as exc:
        raise JWTError("Invalid token subject") from exc

    return Identity(org_id=org_id, email=str(payload.get("email", "")))
