"""JWT authentication provider.

Tokens issued by the identity provider are ES256-signed and verified
against its published JWKS. HS256 tokens signed with the shared secret are
accepted for local development and tests.
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Optional
from uuid import UUID

import httpx
from jose import JWTError, jwt
from jose.backends import ECKey

from core.config import settings
from infrastructure.auth.provider import TokenUser

logger = logging.getLogger(__name__)


class JWKSKeySet:
    """Lazily fetched ``kid -> key`` mapping for the identity provider."""

    def __init__(self, jwks_url: str, timeout: float = 10.0) -> None:
        self._jwks_url = jwks_url
        self._timeout = timeout
        self._keys: dict[str, dict[str, Any]] | None = None

    def invalidate(self) -> None:
        self._keys = None

    async def get(self, kid: str) -> dict[str, Any] | None:
        """Look up a key, refetching once in case the keys were rotated."""
        keys = await self._load()
        if kid in keys:
            return keys[kid]

        self.invalidate()
        keys = await self._load()
        if kid not in keys:
            logger.warning("JWKS key not found for kid=%s", kid)
            return None
        return keys[kid]

    async def _load(self) -> dict[str, dict[str, Any]]:
        if self._keys is not None:
            return self._keys
        if not self._jwks_url:
            return {}

        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(self._jwks_url, timeout=self._timeout)
                response.raise_for_status()
                payload = response.json()
        except (httpx.HTTPError, ValueError):
            logger.exception("Failed to fetch JWKS from %s", self._jwks_url)
            return {}

        self._keys = {
            key_data["kid"]: key_data
            for key_data in payload.get("keys", [])
            if key_data.get("kid")
        }
        logger.info("Fetched %d JWKS keys", len(self._keys))
        return self._keys


class JWTAuthProvider:
    """JWT-based authentication provider."""

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
        key_set: Optional[JWKSKeySet] = None,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes
        self._key_set = key_set or JWKSKeySet(settings.supabase_jwks_url)

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Validate a JWT and extract the user identity.

        Returns:
            TokenUser if valid, None if invalid, expired or missing ``sub``
        """
        try:
            header = jwt.get_unverified_header(token)
            if header.get("alg") == "ES256":
                payload = await self._decode_es256(token, header)
            else:
                payload = jwt.decode(
                    token,
                    self._secret_key,
                    algorithms=[self._algorithm],
                    options={"verify_aud": False},
                )
        except JWTError:
            return None

        if payload is None:
            return None

        subject = payload.get("sub")
        if not subject:
            return None
        try:
            user_id = UUID(subject)
        except ValueError:
            return None

        user_metadata = payload.get("user_metadata") or {}
        return TokenUser(
            id=user_id,
            email=payload.get("email") or None,
            display_name=user_metadata.get("display_name") or user_metadata.get("name"),
            role=payload.get("role"),
        )

    async def _decode_es256(self, token: str, header: dict) -> Optional[dict]:
        kid = header.get("kid")
        if not kid:
            return None

        key_data = await self._key_set.get(kid)
        if key_data is None:
            return None

        return jwt.decode(
            token,
            ECKey(key_data, algorithm="ES256"),
            algorithms=["ES256"],
            options={"verify_aud": False},
        )

    def create_token(self, user: TokenUser) -> str:
        """Create an HS256 token for a user (local development and tests)."""
        expire = datetime.utcnow() + timedelta(minutes=self._expire_minutes)
        payload: dict = {
            "sub": str(user.id),
            "email": user.email,
            "aud": "authenticated",
            "role": "authenticated",
            "exp": expire,
            "user_metadata": {"display_name": user.display_name},
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
