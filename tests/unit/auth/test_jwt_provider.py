"""Unit tests for JWTAuthProvider and the JWKS key set."""

from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import httpx
import pytest
from jose import jwt as jose_jwt

from infrastructure.auth import jwt_provider as jwt_provider_module
from infrastructure.auth.jwt_provider import JWKSKeySet, JWTAuthProvider
from infrastructure.auth.provider import TokenUser

JWKS_URL = "https://example.supabase.co/auth/v1/.well-known/jwks.json"


def _make_hs256_token(payload: dict, secret: str = "test-secret") -> str:
    return jose_jwt.encode(payload, secret, algorithm="HS256")


def _mock_client(payload: dict | None = None, error: Exception | None = None) -> AsyncMock:
    response = MagicMock()
    response.json.return_value = payload or {}
    response.raise_for_status = MagicMock()

    client = AsyncMock()
    if error is not None:
        client.get.side_effect = error
    else:
        client.get.return_value = response
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=False)
    return client


@pytest.fixture
def hs256_provider() -> JWTAuthProvider:
    return JWTAuthProvider(
        secret_key="test-secret",
        algorithm="HS256",
        expire_minutes=30,
        key_set=JWKSKeySet(""),
    )


# ---------------------------------------------------------------------------
# HS256 tokens
# ---------------------------------------------------------------------------


class TestValidateHs256:
    async def test_round_trips_created_token(self, hs256_provider: JWTAuthProvider):
        user = TokenUser(id=uuid4(), email="a@example.com", display_name="Alice")

        result = await hs256_provider.validate_token(hs256_provider.create_token(user))

        assert result is not None
        assert result.id == user.id
        assert result.display_name == "Alice"
        assert result.role == "authenticated"

    async def test_email_is_optional(self, hs256_provider: JWTAuthProvider):
        user_id = uuid4()
        token = _make_hs256_token({"sub": str(user_id), "exp": 9999999999})

        result = await hs256_provider.validate_token(token)

        assert result is not None
        assert result.id == user_id
        assert result.email is None

    @pytest.mark.parametrize("sub", ["", "not-a-uuid"])
    async def test_rejects_bad_subject(self, hs256_provider: JWTAuthProvider, sub: str):
        token = _make_hs256_token({"sub": sub, "exp": 9999999999})

        assert await hs256_provider.validate_token(token) is None

    async def test_rejects_missing_subject(self, hs256_provider: JWTAuthProvider):
        token = _make_hs256_token({"email": "a@example.com", "exp": 9999999999})

        assert await hs256_provider.validate_token(token) is None

    async def test_rejects_wrong_secret(self, hs256_provider: JWTAuthProvider):
        token = _make_hs256_token({"sub": str(uuid4())}, secret="other-secret")

        assert await hs256_provider.validate_token(token) is None

    async def test_rejects_garbage(self, hs256_provider: JWTAuthProvider):
        assert await hs256_provider.validate_token("not.a.jwt") is None


# ---------------------------------------------------------------------------
# JWKSKeySet
# ---------------------------------------------------------------------------


class TestJWKSKeySet:
    async def test_empty_url_has_no_keys(self):
        assert await JWKSKeySet("").get("any") is None

    async def test_fetches_once_and_caches(self):
        client = _mock_client(
            {
                "keys": [
                    {"kid": "key-1", "kty": "EC"},
                    {"kty": "EC"},
                ]
            }
        )
        key_set = JWKSKeySet(JWKS_URL)

        with patch.object(jwt_provider_module.httpx, "AsyncClient", return_value=client):
            first = await key_set.get("key-1")
            second = await key_set.get("key-1")

        assert first == {"kid": "key-1", "kty": "EC"}
        assert second == first
        assert client.get.call_count == 1

    async def test_refetches_once_on_unknown_kid(self):
        client = _mock_client({"keys": [{"kid": "old", "kty": "EC"}]})
        key_set = JWKSKeySet(JWKS_URL)

        with patch.object(jwt_provider_module.httpx, "AsyncClient", return_value=client):
            result = await key_set.get("rotated")

        assert result is None
        assert client.get.call_count == 2

    async def test_http_failure_yields_no_keys(self):
        client = _mock_client(error=httpx.ConnectError("refused"))
        key_set = JWKSKeySet(JWKS_URL)

        with patch.object(jwt_provider_module.httpx, "AsyncClient", return_value=client):
            assert await key_set.get("key-1") is None


# ---------------------------------------------------------------------------
# ES256 tokens
# ---------------------------------------------------------------------------


class TestValidateEs256:
    async def test_header_without_kid(self, hs256_provider: JWTAuthProvider):
        assert await hs256_provider._decode_es256("dummy", {"alg": "ES256"}) is None

    async def test_unknown_kid(self):
        key_set = MagicMock(spec=JWKSKeySet)
        key_set.get = AsyncMock(return_value=None)
        provider = JWTAuthProvider(secret_key="unused", key_set=key_set)

        result = await provider._decode_es256("dummy", {"alg": "ES256", "kid": "missing"})

        assert result is None
        key_set.get.assert_awaited_once_with("missing")

    async def test_decodes_with_matching_key(self):
        key_data = {"kid": "test-kid", "kty": "EC", "crv": "P-256"}
        payload = {"sub": str(uuid4())}
        key_set = MagicMock(spec=JWKSKeySet)
        key_set.get = AsyncMock(return_value=key_data)
        provider = JWTAuthProvider(secret_key="unused", key_set=key_set)

        with (
            patch.object(jwt_provider_module, "ECKey") as mock_eckey_cls,
            patch.object(jwt_provider_module.jwt, "decode", return_value=payload) as mock_decode,
        ):
            result = await provider._decode_es256("es256.token", {"alg": "ES256", "kid": "test-kid"})

        assert result == payload
        mock_eckey_cls.assert_called_once_with(key_data, algorithm="ES256")
        mock_decode.assert_called_once_with(
            "es256.token",
            mock_eckey_cls.return_value,
            algorithms=["ES256"],
            options={"verify_aud": False},
        )

    async def test_validate_token_takes_es256_path(self):
        user_id = uuid4()
        provider = JWTAuthProvider(secret_key="unused", key_set=JWKSKeySet(""))
        payload = {
            "sub": str(user_id),
            "email": "es@example.com",
            "user_metadata": {"name": "Es User"},
        }

        with (
            patch.object(
                jwt_provider_module.jwt,
                "get_unverified_header",
                return_value={"alg": "ES256", "kid": "k1"},
            ),
            patch.object(provider, "_decode_es256", new_callable=AsyncMock) as mock_es256,
        ):
            mock_es256.return_value = payload
            result = await provider.validate_token("es256.token.here")

        mock_es256.assert_awaited_once_with("es256.token.here", {"alg": "ES256", "kid": "k1"})
        assert result is not None
        assert result.id == user_id
        assert result.display_name == "Es User"
