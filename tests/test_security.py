"""
Token and password hashing tests.
"""

import uuid
from datetime import UTC, datetime, timedelta

import pytest
from jose import JWTError, jwt

from petadopt.core.config import settings
from petadopt.core.middleware import extract_bearer_token, resolve_identity
from petadopt.core.security import (
    create_access_token,
    decode_token,
    hash_password,
    verify_access_token,
    verify_password,
)


# ---------------------------------------------------------------------------
# Passwords
# ---------------------------------------------------------------------------

def test_hash_password_roundtrip():
    hashed = hash_password("secret123")
    assert hashed != "secret123"
    assert verify_password("secret123", hashed)
    assert not verify_password("wrong-password", hashed)


def test_hash_password_is_salted():
    assert hash_password("secret123") != hash_password("secret123")


def test_verify_password_rejects_non_bcrypt_hash():
    assert verify_password("secret123", "not-a-bcrypt-hash") is False


# ---------------------------------------------------------------------------
# Access tokens
# ---------------------------------------------------------------------------

def test_access_token_carries_identity():
    org_id = uuid.uuid4()
    token = create_access_token(org_id, "org@example.com")

    identity = verify_access_token(token)

    assert identity.org_id == org_id
    assert identity.email == "org@example.com"


def test_access_token_expires_after_24_hours():
    token = create_access_token(uuid.uuid4(), "org@example.com")
    payload = decode_token(token)
    assert payload["exp"] - payload["iat"] == 24 * 60 * 60


def test_expired_token_is_rejected():
    now = datetime.now(UTC)
    token = jwt.encode(
        {
            "sub": str(uuid.uuid4()),
            "email": "org@example.com",
            "type": "access",
            "iat": now - timedelta(hours=25),
            "exp": now - timedelta(hours=1),
        },
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
    )
    with pytest.raises(JWTError):
        verify_access_token(token)


def test_tampered_token_is_rejected():
    token = create_access_token(uuid.uuid4(), "org@example.com")
    header, payload, signature = token.split(".")
    forged = ".".join([header, payload, signature[::-1]])
    with pytest.raises(JWTError):
        verify_access_token(forged)


def test_token_signed_with_other_secret_is_rejected():
    token = jwt.encode(
        {"sub": str(uuid.uuid4()), "email": "x@example.com", "type": "access"},
        "another-secret-key-that-is-also-32-chars-long",
        algorithm="HS256",
    )
    with pytest.raises(JWTError):
        verify_access_token(token)


def test_non_access_token_is_rejected():
    token = jwt.encode(
        {"sub": str(uuid.uuid4()), "email": "x@example.com", "type": "refresh"},
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
    )
    with pytest.raises(JWTError):
        verify_access_token(token)


def test_token_with_non_uuid_subject_is_rejected():
    token = jwt.encode(
        {"sub": "not-a-uuid", "email": "x@example.com", "type": "access"},
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
    )
    with pytest.raises(JWTError):
        verify_access_token(token)


# ---------------------------------------------------------------------------
# Authorization header parsing
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "header, expected",
    [
        (None, None),
        ("", None),
        ("Bearer abc.def.ghi", "abc.def.ghi"),
        ("bearer abc.def.ghi", "abc.def.ghi"),
        ("Basic dXNlcjpwYXNz", None),
        ("Bearer ", None),
        ("abc.def.ghi", None),
    ],
)
def test_extract_bearer_token(header, expected):
    assert extract_bearer_token(header) == expected


def test_resolve_identity_ignores_invalid_token():
    assert resolve_identity("Bearer garbage") is None


def test_resolve_identity_accepts_valid_token():
    org_id = uuid.uuid4()
    identity = resolve_identity(f"Bearer {create_access_token(org_id, 'a@example.com')}")
    assert identity is not None
    assert identity.org_id == org_id
