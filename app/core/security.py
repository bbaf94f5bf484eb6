"""Password hashing and JWT issuance/verification for authentication."""

from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any

import bcrypt
import jwt

from app.core.config import get_settings
from app.core.errors import AppError, ErrorKind

# bcrypt only looks at the first 72 bytes of a password.
BCRYPT_MAX_BYTES = 72


class PasswordHasher:
    """Salted bcrypt hashing at a fixed cost (log2 rounds)."""

    def __init__(self, rounds: int) -> None:
        self.rounds = rounds

    def hash(self, plain_password: str) -> str:
        """Hash a plain-text password for storage. Do not store plain passwords."""
        pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def verify(self, plain_password: str, hashed: str) -> bool:
        """Verify a plain password against a stored hash."""
        pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        try:
            return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
        except (ValueError, TypeError):
            return False


class TokenService:
    """
    Issue and verify signed tokens whose only claim is the username.

    Stateless: there is no revocation list. When expire_minutes is None the
    token carries no exp claim and stays valid until the secret is rotated.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expire_minutes: int | None = None,
    ) -> None:
        if not secret:
            raise ValueError("Token secret must be non-empty")
        self._secret = secret
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def issue(self, username: str) -> str:
        payload: dict[str, Any] = {"username": username}
        if self.expire_minutes is not None:
            payload["exp"] = datetime.now(UTC) + timedelta(minutes=self.expire_minutes)
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """
        Return the username embedded in a valid token.

        Raises AppError(AUTH) on a bad signature, an expired token or a
        malformed payload. Does not check that the user still exists.
        """
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError as e:
            raise AppError(ErrorKind.AUTH, "Token has expired") from e
        except jwt.PyJWTError as e:
            raise AppError(ErrorKind.AUTH, "Invalid token") from e
        username = payload.get("username")
        if not isinstance(username, str) or not username:
            raise AppError(ErrorKind.AUTH, "Invalid token payload")
        return username


@lru_cache
def get_password_hasher() -> PasswordHasher:
    """Dependency: hasher configured with BCRYPT_WORK_FACTOR."""
    return PasswordHasher(rounds=get_settings().BCRYPT_WORK_FACTOR)


@lru_cache
def get_token_service() -> TokenService:
    """Dependency: token service configured with SECRET_KEY and JWT settings."""
    settings = get_settings()
    return TokenService(
        secret=settings.SECRET_KEY.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
        expire_minutes=settings.JWT_EXPIRE_MINUTES,
    )
