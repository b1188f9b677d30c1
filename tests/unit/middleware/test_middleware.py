"""Unit tests for middleware."""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from api.middleware.logging import RequestLoggingMiddleware
from api.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware
from api.middleware.security import SECURITY_HEADERS, SecurityHeadersMiddleware


def _create_app_with_middleware() -> FastAPI:
    """Minimal app wired like main.create_app."""
    app = FastAPI()
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/test")
    async def _():
        return {"ok": True}

    @app.get("/boom")
    async def _boom():
        raise RuntimeError("boom")

    return app


async def _get(path: str, **kwargs):
    transport = ASGITransport(app=_create_app_with_middleware())
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        return await c.get(path, **kwargs)


class TestSecurityHeadersMiddleware:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("header,value", sorted(SECURITY_HEADERS.items()))
    async def test_adds_header(self, header: str, value: str):
        response = await _get("/test")

        assert response.headers[header] == value


class TestRequestIDMiddleware:
    @pytest.mark.asyncio
    async def test_generates_request_id_when_not_provided(self):
        response = await _get("/test")

        assert response.headers[REQUEST_ID_HEADER]

    @pytest.mark.asyncio
    async def test_propagates_existing_request_id(self):
        response = await _get("/test", headers={REQUEST_ID_HEADER: "custom-req-123"})

        assert response.headers[REQUEST_ID_HEADER] == "custom-req-123"

    @pytest.mark.asyncio
    async def test_replaces_oversized_request_id(self):
        oversized = "x" * 500

        response = await _get("/test", headers={REQUEST_ID_HEADER: oversized})

        assert response.headers[REQUEST_ID_HEADER] != oversized
        assert len(response.headers[REQUEST_ID_HEADER]) <= 128

    @pytest.mark.asyncio
    async def test_generated_ids_differ(self):
        transport = ASGITransport(app=_create_app_with_middleware())
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            r1 = await c.get("/test")
            r2 = await c.get("/test")

        assert r1.headers[REQUEST_ID_HEADER] != r2.headers[REQUEST_ID_HEADER]


class TestRequestLoggingMiddleware:
    @pytest.mark.asyncio
    async def test_reraises_handler_errors(self):
        with pytest.raises(RuntimeError):
            await _get("/boom")
