"""Unit tests for SessionGuardMiddleware.

Tests cover:
- Blacklisted session ids are rejected with a generic 401
- Requests without a bearer token, or with an undecodable one, pass through
- Tokens without a session_id claim pass through
- Health path is never checked
- Lookup errors propagate (request fails rather than passing)
"""

from unittest.mock import AsyncMock

import jwt
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from branchauth.presentation.routers.api.middleware.session_guard import (
    SessionGuardMiddleware,
)


def _app(is_blacklisted) -> FastAPI:
    app = FastAPI()
    app.add_middleware(SessionGuardMiddleware, is_blacklisted=is_blacklisted)

    @app.get("/protected")
    async def protected() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "healthy"}

    return app


def _bearer(payload: dict) -> dict[str, str]:
    # Signature is irrelevant: the guard only reads session_id
    token = jwt.encode(payload, "any-key-any-key-any-key-any-key!", algorithm="HS256")
    return {"Authorization": f"Bearer {token}"}


@pytest.mark.unit
class TestSessionGuardMiddleware:
    def test_rejects_blacklisted_session(self):
        check = AsyncMock(return_value=True)
        client = TestClient(_app(check))

        response = client.get("/protected", headers=_bearer({"session_id": "s-1"}))

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"
        assert response.json()["detail"] == "Authentication failed"
        check.assert_awaited_once_with("s-1")

    def test_allows_session_not_blacklisted(self):
        check = AsyncMock(return_value=False)
        client = TestClient(_app(check))

        response = client.get("/protected", headers=_bearer({"session_id": "s-1"}))

        assert response.status_code == 200
        check.assert_awaited_once_with("s-1")

    def test_passes_request_without_token(self):
        check = AsyncMock(return_value=True)
        client = TestClient(_app(check))

        assert client.get("/protected").status_code == 200
        check.assert_not_awaited()

    def test_passes_undecodable_token(self):
        check = AsyncMock(return_value=True)
        client = TestClient(_app(check))

        response = client.get(
            "/protected", headers={"Authorization": "Bearer not-a-jwt"}
        )

        assert response.status_code == 200
        check.assert_not_awaited()

    def test_passes_token_without_session_id(self):
        check = AsyncMock(return_value=True)
        client = TestClient(_app(check))

        response = client.get("/protected", headers=_bearer({"sub": "u-1"}))

        assert response.status_code == 200
        check.assert_not_awaited()

    def test_skips_health(self):
        check = AsyncMock(return_value=True)
        client = TestClient(_app(check))

        response = client.get("/health", headers=_bearer({"session_id": "s-1"}))

        assert response.status_code == 200
        check.assert_not_awaited()

    def test_lookup_error_propagates(self):
        check = AsyncMock(side_effect=RuntimeError("database unavailable"))
        client = TestClient(_app(check), raise_server_exceptions=False)

        response = client.get("/protected", headers=_bearer({"session_id": "s-1"}))

        assert response.status_code == 500
