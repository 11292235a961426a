"""Unit tests for ErrorResponseBuilder."""

import json
from unittest.mock import MagicMock

import pytest

from branchauth.domain.errors import (
    AccountInactiveError,
    AccountLockedError,
    InvalidCredentialsError,
    InvalidRefreshTokenError,
    InvalidTokenError,
    RefreshTokenExpiredError,
    SessionNotFoundError,
)
from branchauth.presentation.routers.api.v1.errors import ErrorResponseBuilder


def _request(path: str) -> MagicMock:
    request = MagicMock()
    request.url.path = path
    return request


@pytest.mark.unit
class TestErrorResponseBuilder:
    @pytest.mark.parametrize(
        "error",
        [
            InvalidCredentialsError(),
            AccountInactiveError(),
            AccountLockedError(),
            InvalidTokenError(),
            InvalidRefreshTokenError(),
            RefreshTokenExpiredError(),
        ],
    )
    def test_auth_errors_collapse_to_generic_401(self, error):
        # Arrange
        logger = MagicMock()

        # Act
        response = ErrorResponseBuilder.from_domain_error(
            error, _request("/api/v1/auth/login"), logger
        )

        # Assert
        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"
        body = json.loads(bytes(response.body))
        assert body["status"] == 401
        assert body["title"] == "Authentication Required"
        assert body["detail"] == "Authentication failed"
        assert body["instance"] == "/api/v1/auth/login"
        assert body["type"].endswith("/errors/unauthorized")
        assert error.code.value not in bytes(response.body).decode()
        assert error.message not in bytes(response.body).decode()

    def test_specific_code_is_logged(self):
        logger = MagicMock()

        ErrorResponseBuilder.from_domain_error(
            AccountLockedError(), _request("/api/v1/auth/login"), logger
        )

        logger.warning.assert_called_once_with(
            "auth_request_rejected",
            error_code="account_locked",
            path="/api/v1/auth/login",
        )

    def test_session_not_found_is_404(self):
        response = ErrorResponseBuilder.from_domain_error(
            SessionNotFoundError(),
            _request("/api/v1/auth/sessions/current"),
            MagicMock(),
        )

        assert response.status_code == 404
        body = json.loads(bytes(response.body))
        assert body["title"] == "Resource Not Found"
        assert body["detail"] == "Session not found"
