"""Security utilities for JWT and password hashing."""

from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

import bcrypt
import jwt

from movie_api.config import Settings
from movie_api.logger import get_logger

logger = get_logger(__name__)

BCRYPT_ROUNDS = 10
# bcrypt only uses the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


class InvalidTokenError(Exception):
    """Token signature, expiry or subject could not be validated."""


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """Hash a password using bcrypt with a fresh salt."""
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(_encode(password), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    try:
        return bcrypt.checkpw(_encode(plain_password), hashed_password.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


class TokenService:
    """Issues and verifies signed bearer tokens binding a user id."""

    def __init__(self, secret: str, *, algorithm: str = "HS256", lifetime: timedelta = timedelta(days=30)):
        if not secret:
            raise ValueError("jwt_secret_blank")
        self._secret = secret
        self._algorithm = algorithm
        self.lifetime = lifetime

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            settings.secret_key,
            algorithm=settings.jwt_algorithm,
            lifetime=timedelta(days=settings.access_token_expire_days),
        )

    def issue(self, user_id: UUID) -> str:
        now = datetime.now(UTC)
        payload: dict[str, Any] = {
            "sub": str(user_id),
            "iat": now,
            "exp": now + self.lifetime,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> UUID:
        """Return the user id bound to the token, or raise InvalidTokenError."""
        if not token:
            raise InvalidTokenError("token_blank")
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except jwt.ExpiredSignatureError as exc:
            logger.debug("JWT token expired")
            raise InvalidTokenError("token_expired") from exc
        except jwt.PyJWTError as exc:
            logger.warning(
                "JWT decode failed",
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise InvalidTokenError("token_invalid") from exc

        subject = payload.get("sub")
        if not subject:
            raise InvalidTokenError("token_missing_sub")
        try:
            return UUID(str(subject))
        except ValueError as exc:
            raise InvalidTokenError("token_sub_not_uuid") from exc
