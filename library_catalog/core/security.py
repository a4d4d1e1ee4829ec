"""Password hashing and JWT creation/verification for authentication."""

import base64
import hashlib
import hmac
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from library_catalog.core.config import settings

# Digest used for stored password hashes (base64 text in users.password_hash).
PASSWORD_DIGEST = "sha256"

# Min/max lengths for username and password validation.
USERNAME_MIN_LEN = 1
USERNAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 1
PASSWORD_MAX_LEN = 128


class HashingUnavailable(RuntimeError):
    """Raised when the password digest is missing from this Python build."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


def is_encodable(text: str) -> bool:
    """True when text has a UTF-8 encoding (no lone surrogates)."""
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def hash_password(plain_password: str) -> str:
    """
    Hash a plain-text password for storage: SHA-256 of the UTF-8 bytes, base64 encoded.
    Deterministic, so the same password always yields the same stored value.
    Raises UnicodeEncodeError for text that is_encodable rejects.
    """
    try:
        digest = hashlib.new(PASSWORD_DIGEST)
    except ValueError as e:
        raise HashingUnavailable(f"{PASSWORD_DIGEST} is not available: {e}") from e
    digest.update(plain_password.encode("utf-8"))
    return base64.b64encode(digest.digest()).decode("ascii")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash (constant-time compare)."""
    if not isinstance(plain_password, str) or not isinstance(hashed, str):
        return False
    try:
        candidate = hash_password(plain_password)
        stored = hashed.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return hmac.compare_digest(candidate.encode("ascii"), stored)


def create_access_token(sub: str, role: str) -> str:
    """Create a JWT access token with sub (username), role, and exp."""
    now = datetime.now(UTC)
    expire = now + timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        "sub": str(sub),
        "role": role,
        "exp": expire,
        "iat": now,
    }
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.encode(
        payload,
        secret,
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and validate JWT; return payload (sub, role, exp, iat).
    Raises jwt.PyJWTError on invalid or expired token.
    """
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.decode(
        token,
        secret,
        algorithms=[settings.JWT_ALGORITHM],
    )
