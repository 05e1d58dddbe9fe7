"""Password hashing and bearer token signing."""

from __future__ import annotations

import asyncio
import base64
import hashlib
from datetime import UTC, datetime, timedelta

import bcrypt
import jwt
from jwt.exceptions import InvalidTokenError

from ..logging import get_logger

logger = get_logger(__name__)


class AuthenticationError(Exception):
    """Raised when a bearer token cannot be verified."""

    pass


class CredentialCodec:
    """Hashes passwords with bcrypt and issues self-signed JWTs.

    Built once at startup from settings; holds no mutable state.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        token_expiry: timedelta = timedelta(days=7),
        bcrypt_rounds: int = 10,
    ):
        if not secret_key:
            raise ValueError("JWT secret key is required")
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.token_expiry = token_expiry
        self.bcrypt_rounds = bcrypt_rounds

    @classmethod
    def from_settings(cls, settings) -> CredentialCodec:
        return cls(
            secret_key=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            token_expiry=timedelta(days=settings.token_expiry_days),
            bcrypt_rounds=settings.bcrypt_rounds,
        )

    @staticmethod
    def _prehash(password: str) -> bytes:
        # bcrypt only accepts 72 bytes; a SHA-256 digest keeps every byte significant
        digest = hashlib.sha256(password.encode("utf-8")).digest()
        return base64.b64encode(digest)

    def hash_password(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.bcrypt_rounds)
        return bcrypt.hashpw(self._prehash(password), salt).decode("utf-8")

    def verify_password(self, password: str, hashed: str) -> bool:
        """Check a password against a stored hash; malformed hashes never match."""
        try:
            return bcrypt.checkpw(self._prehash(password), hashed.encode("utf-8"))
        except (ValueError, TypeError):
            logger.warning("Stored password hash could not be checked")
            return False

    async def hash_password_async(self, password: str) -> str:
        return await asyncio.to_thread(self.hash_password, password)

    async def verify_password_async(self, password: str, hashed: str) -> bool:
        return await asyncio.to_thread(self.verify_password, password, hashed)

    def issue_token(self, account_id: str, now: datetime | None = None) -> str:
        """Sign ``{sub, iat, exp}`` for the account with the configured expiry."""
        issued_at = now or datetime.now(UTC)
        payload = {
            "sub": str(account_id),
            "iat": issued_at,
            "exp": issued_at + self.token_expiry,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify_token(self, token: str) -> str:
        """Return the account id a token was issued for.

        Raises:
            AuthenticationError: If the token is malformed, forged or expired
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"verify_exp": True, "verify_iat": True, "require": ["sub", "exp"]},
            )
        except InvalidTokenError as e:
            logger.debug("JWT token validation failed", error=str(e))
            raise AuthenticationError("Invalid token") from e

        subject = payload.get("sub")
        if not subject:
            raise AuthenticationError("Missing 'sub' claim in token")
        return subject
