"""Tests for sri_audit.security_headers: the response header middleware."""

from __future__ import annotations

import fastapi
from fastapi.testclient import TestClient
from starlette import responses

from sri_audit.security_headers import DEFAULT_HEADERS, SecurityHeadersMiddleware


def _build_app(headers: dict[str, str] | None = None) -> fastapi.FastAPI:
    app = fastapi.FastAPI()
    if headers is None:
        app.add_middleware(SecurityHeadersMiddleware)
    else:
        app.add_middleware(SecurityHeadersMiddleware, headers=headers)

    @app.get("/plain")
    async def plain() -> responses.JSONResponse:
        return responses.JSONResponse({"ok": True})

    @app.get("/framed")
    async def framed() -> responses.JSONResponse:
        return responses.JSONResponse({"ok": True}, headers={"X-Frame-Options": "DENY"})

    return app


class TestSecurityHeadersMiddleware:
    """Tests for SecurityHeadersMiddleware."""

    def test_applies_defaults(self) -> None:
        with TestClient(_build_app()) as client:
            response = client.get("/plain")
        for name, value in DEFAULT_HEADERS.items():
            assert response.headers[name] == value

    def test_applies_to_unknown_routes(self) -> None:
        with TestClient(_build_app()) as client:
            response = client.get("/missing")
        assert response.status_code == 404
        assert response.headers["X-Content-Type-Options"] == "nosniff"

    def test_custom_headers_replace_defaults(self) -> None:
        with TestClient(_build_app({"X-Custom": "1"})) as client:
            response = client.get("/plain")
        assert response.headers["X-Custom"] == "1"
        assert "Content-Security-Policy" not in response.headers

    def test_route_header_is_kept(self) -> None:
        with TestClient(_build_app()) as client:
            response = client.get("/framed")
        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["Referrer-Policy"] == "no-referrer"

    def test_defaults_are_copied(self) -> None:
        middleware = SecurityHeadersMiddleware(fastapi.FastAPI())
        middleware.headers["X-Frame-Options"] = "DENY"
        assert DEFAULT_HEADERS["X-Frame-Options"] == "SAMEORIGIN"
