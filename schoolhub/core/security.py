"""Password hashing and JWT issuance/verification for authentication."""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt
from pydantic import BaseModel

from schoolhub.core.config import settings
from schoolhub.core.exceptions import InvalidTokenError

# Min/max lengths for password validation (bcrypt only reads the first 72 bytes).
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128

# Range of the integer primary key on users.
USER_ID_MIN = 1
USER_ID_MAX = 2**31 - 1


class TokenClaims(BaseModel):
    """Verified token contents."""

    user_id: int
    expires_at: datetime


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def issue_access_token(
    user_id: int,
    expires_delta: timedelta | None = None,
    now: datetime | None = None,
) -> str:
    """Create a JWT carrying only the user id (sub) and expiry (exp)."""
    issued_at = now or datetime.now(UTC)
    if expires_delta is None:
        expires_delta = timedelta(days=settings.JWT_EXPIRE_DAYS)
    payload: dict[str, Any] = {
        "sub": str(user_id),
        "exp": issued_at + expires_delta,
    }
    return jwt.encode(
        payload,
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )


def verify_access_token(token: str) -> TokenClaims:
    """
    Decode and validate a JWT; return its claims.
    Raises InvalidTokenError for any signature, format, payload or expiry problem.
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET.get_secret_value(),
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["exp", "sub"]},
        )
    except jwt.PyJWTError as e:
        raise InvalidTokenError() from e

    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError) as e:
        raise InvalidTokenError() from e
    if not USER_ID_MIN <= user_id <= USER_ID_MAX:
        raise InvalidTokenError()
    return TokenClaims(
        user_id=user_id,
        expires_at=datetime.fromtimestamp(payload["exp"], tz=UTC),
    )
