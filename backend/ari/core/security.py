from datetime import datetime, timedelta, timezone
from typing import Any, Optional
from fastapi.concurrency import run_in_threadpool
from jose import JWTError, jwt
from passlib.context import CryptContext
from ari.core.config import settings


class TokenError(Exception):
    """Raised when a bearer token cannot be verified."""


class PasswordHasher:
    """bcrypt password hashing with a configurable work factor.

    bcrypt is CPU bound, so both operations are pushed to the threadpool and
    awaited; the event loop keeps serving other requests meanwhile.
    """

    def __init__(self, rounds: Optional[int] = None):
        # Settings are read when the hasher is built, not when this module is imported
        self.rounds = rounds if rounds is not None else settings.BCRYPT_ROUNDS
        # bcrypt generates a salt per hash, the same password never hashes twice the same
        # 'deprecated="auto"' lets passlib flag hashes made with older schemes
        self._context = CryptContext(
            schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=self.rounds
        )

    def hash_sync(self, password: str) -> str:
        return self._context.hash(password)

    def verify_sync(self, plain_password: str, hashed_password: str) -> bool:
        # Constant-time comparison, a malformed hash counts as a mismatch
        try:
            return self._context.verify(plain_password, hashed_password)
        except ValueError:
            return False

    async def hash(self, password: str) -> str:
        return await run_in_threadpool(self.hash_sync, password)

    async def verify(self, plain_password: str, hashed_password: str) -> bool:
        return await run_in_threadpool(self.verify_sync, plain_password, hashed_password)


class TokenService:
    """Signs and verifies HS256 access tokens carrying the user id as ``sub``."""

    def __init__(
        self,
        secret_key: Optional[str] = None,
        algorithm: Optional[str] = None,
        expire_minutes: Optional[int] = None,
    ):
        # Anything not passed in comes from the current settings
        self.secret_key = secret_key if secret_key is not None else settings.SECRET_KEY
        # Algorithm must match in decode - changing it invalidates all issued tokens
        self.algorithm = algorithm if algorithm is not None else settings.ALGORITHM
        if expire_minutes is None:
            expire_minutes = settings.ACCESS_TOKEN_EXPIRE_MINUTES
        self.expires_delta = timedelta(minutes=expire_minutes)

    def sign(self, subject: Any, expires_delta: Optional[timedelta] = None) -> str:
        """Create a JWT access token with expiration"""
        # Use timezone.utc instead of utcnow() (deprecated in Python 3.12+)
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta if expires_delta is not None else self.expires_delta)
        # JWT requires 'sub' to be a string, ids are converted back on verify
        to_encode = {"sub": str(subject), "iat": now, "exp": expire}
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> dict:
        """Decode a token, checking signature and expiry.

        Raises TokenError when the token is tampered with, expired, signed
        with another key, or carries no subject.
        """
        try:
            # Signature and 'exp' are both checked by jose
            claims = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            raise TokenError(str(e)) from e
        if not claims.get("sub"):
            raise TokenError("Token has no subject")
        return claims


# Shared instances used by the API dependencies
password_hasher = PasswordHasher()
token_service = TokenService()
