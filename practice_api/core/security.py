"""Password hashing and JWT creation/verification for authentication."""

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import bcrypt
import jwt

from practice_api.core.errors import AuthError
from practice_api.schemas.auth import TokenIdentity

if TYPE_CHECKING:
    from practice_api.core.config import Settings

# Bcrypt cost (rounds) used when the caller does not pass one.
BCRYPT_ROUNDS = 12

# Min/max lengths for username and password validation.
USERNAME_MIN_LEN = 3
USERNAME_MAX_LEN = 255
# RFC 5321 path limit; also fits the String(255) column.
EMAIL_MAX_LEN = 254
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128

_REQUIRED_CLAIMS = ["sub", "email", "role", "exp", "iat"]


def hash_password(plain_password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a plain-text password for storage with a fresh random salt."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def create_access_token(
    identity: TokenIdentity,
    settings: "Settings",
    ttl: timedelta | None = None,
    now: datetime | None = None,
) -> str:
    """Create a JWT binding user id (sub), email and role; expires after ttl."""
    issued_at = now or datetime.now(UTC)
    if ttl is None:
        ttl = timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        "sub": identity.user_id,
        "email": identity.email,
        "role": identity.role,
        "iat": issued_at,
        "exp": issued_at + ttl,
    }
    return jwt.encode(
        payload,
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str, settings: "Settings") -> TokenIdentity:
    """
    Decode and validate a JWT; return the embedded identity claims.
    Raises AuthError on a bad signature, malformed or expired token, or missing claims.
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET.get_secret_value(),
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": _REQUIRED_CLAIMS},
        )
    except jwt.PyJWTError as e:
        raise AuthError("Invalid or expired token") from e
    if not payload["sub"]:
        raise AuthError("Invalid or expired token")
    return TokenIdentity(
        user_id=str(payload["sub"]),
        email=str(payload["email"]),
        role=str(payload["role"]),
    )
