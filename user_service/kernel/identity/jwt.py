"""
JWT token management for authentication.

Tokens carry ``{"id": <user id>, "exp": <unix seconds>}`` and are signed
with an RSA private key; verification uses the matching public key.
"""

import threading
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

from jose import JWTError, jwk, jwt
from jose.exceptions import JOSEError
from pydantic import BaseModel

from user_service.config import DEFAULT_TOKEN_LIFETIME_MINUTES, Settings
from user_service.kernel.identity.errors import (
    KeyMaterialError,
    SigningError,
    TokenInvalidError,
)
from user_service.logging_config import get_logger

logger = get_logger(__name__)

# Signature algorithms accepted on verification (RSA family only)
RSA_ALGORITHMS = ["RS256", "RS384", "RS512"]


class AccessTokenPayload(BaseModel):
    """JWT access token payload."""

    id: int  # User ID
    exp: datetime


class RSAKeyPair(BaseModel):
    """PEM-encoded RSA key pair, immutable once loaded."""

    private_key: str
    public_key: str

    model_config = {"frozen": True}


def _read_pem(inline: Optional[str], path: Optional[str], what: str) -> str:
    if inline:
        return inline
    if not path:
        raise KeyMaterialError(f"no {what} key configured")
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise KeyMaterialError(f"cannot read {what} key from {path}") from e


def _check_pem(pem: str, algorithm: str, what: str) -> None:
    try:
        jwk.construct(pem, algorithm)
    except JOSEError as e:
        raise KeyMaterialError(f"cannot parse {what} key") from e


class JWTManager:
    """
    JWT token creation and verification.

    Key material is loaded on first use (or eagerly via ``load_keys``) and
    cached on the instance; a lock makes the first load single-flight.
    Keys are never reloaded, so rotating them requires a restart.
    """

    def __init__(
        self,
        private_key: Optional[str] = None,
        public_key: Optional[str] = None,
        private_key_path: Optional[str] = None,
        public_key_path: Optional[str] = None,
        algorithm: str = "RS256",
        access_token_expire_minutes: Optional[int] = None,
    ):
        if algorithm not in RSA_ALGORITHMS:
            raise ValueError(f"unsupported signing algorithm: {algorithm}")
        self.algorithm = algorithm
        self.access_token_expire_minutes = access_token_expire_minutes
        self._private_key = private_key
        self._public_key = public_key
        self._private_key_path = private_key_path
        self._public_key_path = public_key_path
        self._keys: Optional[RSAKeyPair] = None
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> "JWTManager":
        return cls(
            private_key=settings.jwt_private_key or None,
            public_key=settings.jwt_public_key or None,
            private_key_path=settings.jwt_private_key_path,
            public_key_path=settings.jwt_public_key_path,
            algorithm=settings.jwt_algorithm,
            access_token_expire_minutes=settings.jwt_lifetime_minutes,
        )

    def load_keys(self) -> RSAKeyPair:
        """
        Load and parse the key pair, once.

        Raises:
            KeyMaterialError: If either key cannot be read or parsed
        """
        keys = self._keys
        if keys is not None:
            return keys
        with self._lock:
            if self._keys is None:
                private_pem = _read_pem(self._private_key, self._private_key_path, "private")
                public_pem = _read_pem(self._public_key, self._public_key_path, "public")
                _check_pem(private_pem, self.algorithm, "private")
                _check_pem(public_pem, self.algorithm, "public")
                self._keys = RSAKeyPair(private_key=private_pem, public_key=public_pem)
                logger.info("Loaded RSA key pair", extra={"algorithm": self.algorithm})
            return self._keys

    def _lifetime(self, expires_minutes: Optional[int]) -> timedelta:
        minutes = expires_minutes or self.access_token_expire_minutes
        if not minutes or minutes <= 0:
            minutes = DEFAULT_TOKEN_LIFETIME_MINUTES
        return timedelta(minutes=minutes)

    def create_access_token(
        self,
        user_id: int,
        expires_minutes: Optional[int] = None,
    ) -> tuple[str, datetime]:
        """
        Create a new access token.

        Args:
            user_id: User's unique identifier
            expires_minutes: Optional lifetime; non-positive means the default

        Returns:
            Tuple of (token, expiration_datetime)

        Raises:
            SigningError: If the key cannot be loaded or signing fails
        """
        keys = self.load_keys()
        expire = datetime.now(timezone.utc) + self._lifetime(expires_minutes)
        payload = {
            "id": user_id,
            "exp": int(expire.timestamp()),
        }
        try:
            token = jwt.encode(payload, keys.private_key, algorithm=self.algorithm)
        except JOSEError as e:
            raise SigningError("failed to sign access token") from e
        return token, expire

    def decode_access_token(self, token: str) -> AccessTokenPayload:
        """
        Verify and decode an access token.

        Args:
            token: JWT access token

        Returns:
            AccessTokenPayload for a valid token

        Raises:
            TokenInvalidError: On a bad signature, a non-RSA algorithm,
                an expired token or missing claims
            KeyMaterialError: If the public key cannot be loaded
        """
        keys = self.load_keys()
        try:
            claims = jwt.decode(token, keys.public_key, algorithms=RSA_ALGORITHMS)
        except JWTError as e:
            raise TokenInvalidError(str(e)) from e

        user_id = claims.get("id")
        exp = claims.get("exp")
        # JSON numbers may come back as floats; bool is never an id
        if isinstance(user_id, float) and user_id.is_integer():
            user_id = int(user_id)
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            raise TokenInvalidError("token has no usable id claim")
        if not isinstance(exp, (int, float)):
            raise TokenInvalidError("token has no exp claim")

        return AccessTokenPayload(
            id=user_id,
            exp=datetime.fromtimestamp(exp, tz=timezone.utc),
        )

    def verify_access_token(self, token: str) -> int:
        """Verify an access token and return the user id it was issued for."""
        return self.decode_access_token(token).id


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """
    Pull the token out of an ``Authorization`` header value.

    The value must split on spaces into exactly a scheme and a token;
    anything else yields None.
    """
    if not authorization:
        return None
    parts = authorization.split(" ")
    if len(parts) != 2 or not parts[1]:
        return None
    return parts[1]
