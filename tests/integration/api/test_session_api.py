"""Integration tests for the session API."""

import pytest
from httpx import AsyncClient

from tests.conftest import TEST_USER_ID


class TestSessionAPI:
    """Sign-in and sign-out lifecycle."""

    @pytest.mark.asyncio
    async def test_start_session(self, authenticated_client: AsyncClient):
        """POST /api/v1/session resolves the badge and loads the feed."""
        response = await authenticated_client.post("/api/v1/session")

        assert response.status_code == 200
        data = response.json()
        assert data["user_id"] == str(TEST_USER_ID)
        assert data["display_initial"] == "T"
        assert data["profile_path"] == f"/profile/{TEST_USER_ID}"
        assert data["message_log_path"] == f"/message-log/{TEST_USER_ID}"
        assert data["feed_version"] == 1
        assert data["feed_error"] is None

    @pytest.mark.asyncio
    async def test_repeated_start_returns_same_session(self, authenticated_client: AsyncClient):
        first = (await authenticated_client.post("/api/v1/session")).json()
        second = (await authenticated_client.post("/api/v1/session")).json()

        assert second["started_at"] == first["started_at"]
        assert second["feed_version"] == first["feed_version"]

    @pytest.mark.asyncio
    async def test_get_session_before_start(self, authenticated_client: AsyncClient):
        response = await authenticated_client.get("/api/v1/session")

        assert response.status_code == 409
        assert response.json()["error_code"] == "SESSION_NOT_STARTED"

    @pytest.mark.asyncio
    async def test_sign_out(self, authenticated_client: AsyncClient):
        await authenticated_client.post("/api/v1/session")

        response = await authenticated_client.delete("/api/v1/session")

        assert response.status_code == 200
        assert response.json()["redirect"] == "/login"
        assert (await authenticated_client.get("/api/v1/feed")).status_code == 409

    @pytest.mark.asyncio
    async def test_requires_auth(self, client: AsyncClient):
        response = await client.post("/api/v1/session")

        assert response.status_code == 401
        assert response.json()["error_code"] == "UNAUTHORIZED"
