"""
Security utilities for password hashing and JWT access/refresh tokens.

The abstract services are what use-cases depend on; the passlib and
python-jose implementations are wired in by the container.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from passlib.context import CryptContext
from jose import JWTError, jwt
from pydantic import BaseModel, Field

from .exceptions import UnauthorizedError

logger = logging.getLogger(__name__)


class TokenPair(BaseModel):
    """Access/refresh token pair returned to clients."""
    access_token: str = Field(..., alias="accessToken")
    refresh_token: str = Field(..., alias="refreshToken")

    model_config = {"populate_by_name": True}


class TokenPayload(BaseModel):
    """Claims carried by access and refresh tokens."""
    sub: str
    email: str
    roles: List[str] = Field(default_factory=list)
    family_id: Optional[str] = Field(None, alias="familyId")

    model_config = {"populate_by_name": True}


class HashingService(ABC):
    """One-way password hashing contract."""

    @abstractmethod
    def hash(self, plain: str) -> str:
        pass

    @abstractmethod
    def compare(self, plain: str, hashed: str) -> bool:
        pass


class TokenService(ABC):
    """Contract for issuing and verifying access/refresh tokens."""

    @abstractmethod
    def sign_access_token(self, payload: TokenPayload) -> str:
        pass

    @abstractmethod
    def sign_refresh_token(self, payload: TokenPayload) -> str:
        pass

    @abstractmethod
    def verify_access_token(self, token: str) -> TokenPayload:
        pass

    @abstractmethod
    def verify_refresh_token(self, token: str) -> TokenPayload:
        pass

    def issue_pair(self, payload: TokenPayload) -> TokenPair:
        """Sign both tokens for the same claims."""
        return TokenPair(
            access_token=self.sign_access_token(payload),
            refresh_token=self.sign_refresh_token(payload),
        )


class PasswordHasher(HashingService):
    """
    passlib backed hashing service.
    The first configured scheme hashes new passwords; the others still verify.
    """

    def __init__(self, schemes: Optional[List[str]] = None, bcrypt_rounds: int = 12):
        self._context = CryptContext(
            schemes=schemes or ["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=bcrypt_rounds,
        )

    def hash(self, plain: str) -> str:
        return self._context.hash(plain)

    def compare(self, plain: str, hashed: str) -> bool:
        try:
            return self._context.verify(plain, hashed)
        except (ValueError, TypeError) as e:
            logger.warning(f"Password hash could not be verified: {e}")
            return False


class JWTTokenService(TokenService):
    """
    python-jose backed token service.

    Access and refresh tokens share the secret and are told apart by the
    ``type`` claim.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        access_token_expire_minutes: int = 15,
        refresh_token_expire_days: int = 7,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.access_token_expire = timedelta(minutes=access_token_expire_minutes)
        self.refresh_token_expire = timedelta(days=refresh_token_expire_days)

    def sign_access_token(self, payload: TokenPayload) -> str:
        token = self._encode(payload, "access", self.access_token_expire)
        logger.debug(f"Access token created for user: {payload.sub}")
        return token

    def sign_refresh_token(self, payload: TokenPayload) -> str:
        token = self._encode(payload, "refresh", self.refresh_token_expire)
        logger.debug(f"Refresh token created for user: {payload.sub}")
        return token

    def verify_access_token(self, token: str) -> TokenPayload:
        return self._decode(token, "access")

    def verify_refresh_token(self, token: str) -> TokenPayload:
        return self._decode(token, "refresh")

    def _encode(self, payload: TokenPayload, token_type: str, lifetime: timedelta) -> str:
        now = datetime.now(timezone.utc)
        to_encode: Dict[str, Any] = payload.model_dump(by_alias=True, exclude_none=True)
        to_encode.update({
            "exp": now + lifetime,
            "iat": now,
            "type": token_type,
        })
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def _decode(self, token: str, token_type: str) -> TokenPayload:
        """
        Verify and decode a JWT token.

        Args:
            token: JWT token to verify
            token_type: Expected token type (access/refresh)

        Returns:
            TokenPayload: Decoded claims

        Raises:
            UnauthorizedError: If the token is invalid, expired or of the wrong type
        """
        try:
            claims = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            logger.warning(f"JWT validation failed: {e}")
            raise UnauthorizedError("Could not validate credentials") from e

        if claims.get("type") != token_type:
            logger.warning(f"Token type mismatch. Expected: {token_type}, Got: {claims.get('type')}")
            raise UnauthorizedError("Could not validate credentials")

        if not claims.get("sub"):
            logger.warning("Token missing subject (user_id)")
            raise UnauthorizedError("Could not validate credentials")

        return TokenPayload.model_validate(claims)
