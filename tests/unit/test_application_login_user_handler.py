"""Unit tests for LoginUserHandler.

Tests cover:
- Successful login (tokens, user projection, audit, streak reset)
- Unknown username and wrong password (same error, distinct audit reason)
- Inactive and locked accounts (password never checked)
- Failure counting through the attempt tracker
- One clock reading per login attempt
- Audit failures never change the outcome

Architecture:
- Unit tests for application handler (mocked dependencies)
"""

from datetime import timedelta
from unittest.mock import AsyncMock, Mock

import pytest

from branchauth.application.commands import LoginUser
from branchauth.application.commands.handlers import LoginUserHandler
from branchauth.application.commands.handlers.login_user_handler import (
    LoginFailureReason,
)
from branchauth.application.dtos import IssuedTokens, LoginResponse
from branchauth.core.result import Failure, Success
from branchauth.domain.errors import (
    AccountInactiveError,
    AccountLockedError,
    InvalidCredentialsError,
)
from tests.conftest import T0, create_credential


def create_handler(clock, credential=None, password_ok=True):
    user_repo = AsyncMock()
    user_repo.find_by_username.return_value = credential

    password_service = Mock()
    password_service.verify_password.return_value = password_ok

    token_issuer = AsyncMock()
    token_issuer.issue.return_value = IssuedTokens(
        access_token="access_token_123",
        refresh_token="refresh_token_456",
        expires_in=3600,
        session_id="session-1",
    )

    attempt_tracker = AsyncMock()
    attempt_tracker.record_success.side_effect = lambda c: c

    mocks = {
        "user_repo": user_repo,
        "password_service": password_service,
        "token_issuer": token_issuer,
        "attempt_tracker": attempt_tracker,
        "login_audit_repo": AsyncMock(),
        "logger": Mock(),
    }
    return LoginUserHandler(clock=clock, **mocks), mocks


def login_command(username="alice", password="correct horse"):
    return LoginUser(
        username=username,
        password=password,
        ip_address="10.0.0.7",
        user_agent="Mozilla/5.0",
        device_id="dev-1",
    )


@pytest.mark.unit
class TestLoginUserHandlerSuccess:
    async def test_login_success_returns_tokens_and_profile(self, clock):
        # Arrange
        credential = create_credential(roles=["teller"])
        handler, mocks = create_handler(clock, credential)

        # Act
        result = await handler.handle(login_command())

        # Assert
        assert isinstance(result, Success)
        assert isinstance(result.value, LoginResponse)
        assert result.value.access_token == "access_token_123"
        assert result.value.refresh_token == "refresh_token_456"
        assert result.value.token_type == "Bearer"
        assert result.value.expires_in == 3600
        assert result.value.user.id == credential.id
        assert result.value.user.branch_id == credential.branch_id
        assert result.value.user.roles == ["teller"]
        mocks["password_service"].verify_password.assert_called_once_with(
            "correct horse", credential.password_hash
        )
        mocks["token_issuer"].issue.assert_awaited_once_with(
            credential, "10.0.0.7", "Mozilla/5.0", device_id="dev-1", now=T0
        )

    async def test_login_success_resets_streak_and_audits_session(self, clock):
        credential = create_credential(failed_login_attempts=2)
        handler, mocks = create_handler(clock, credential)

        await handler.handle(login_command())

        mocks["attempt_tracker"].record_success.assert_awaited_once_with(credential)
        mocks["attempt_tracker"].record_failure.assert_not_awaited()
        record = mocks["login_audit_repo"].save.await_args.args[0]
        assert record.is_successful
        assert record.session_id == "session-1"
        assert record.user_id == credential.id
        assert record.login_at == T0

    async def test_audit_failure_does_not_block_login(self, clock):
        handler, mocks = create_handler(clock, create_credential())
        mocks["login_audit_repo"].save.side_effect = RuntimeError("audit down")

        result = await handler.handle(login_command())

        assert isinstance(result, Success)
        mocks["logger"].error.assert_called_once()
        assert mocks["logger"].error.call_args.args[0] == "login_audit_write_failed"


@pytest.mark.unit
class TestLoginUserHandlerFailure:
    async def test_unknown_username_returns_invalid_credentials(self, clock):
        handler, mocks = create_handler(clock, credential=None)

        result = await handler.handle(login_command(username="mallory"))

        assert isinstance(result, Failure)
        assert isinstance(result.error, InvalidCredentialsError)
        mocks["password_service"].verify_password.assert_not_called()
        record = mocks["login_audit_repo"].save.await_args.args[0]
        assert not record.is_successful
        assert record.failure_reason == LoginFailureReason.USER_NOT_FOUND
        assert record.user_id is None

    async def test_wrong_password_counts_failure(self, clock):
        credential = create_credential()
        handler, mocks = create_handler(clock, credential, password_ok=False)

        result = await handler.handle(login_command(password="wrong"))

        assert isinstance(result, Failure)
        assert isinstance(result.error, InvalidCredentialsError)
        mocks["attempt_tracker"].record_failure.assert_awaited_once_with(
            credential, T0
        )
        mocks["token_issuer"].issue.assert_not_awaited()
        record = mocks["login_audit_repo"].save.await_args.args[0]
        assert record.failure_reason == LoginFailureReason.INVALID_PASSWORD
        assert record.user_id == credential.id

    async def test_failure_is_counted_and_audited_at_one_instant(self):
        credential = create_credential()
        ticking_clock = Mock()
        ticking_clock.now.side_effect = [T0, T0 + timedelta(seconds=1)]
        handler, mocks = create_handler(ticking_clock, credential, password_ok=False)

        await handler.handle(login_command(password="wrong"))

        mocks["attempt_tracker"].record_failure.assert_awaited_once_with(
            credential, T0
        )
        record = mocks["login_audit_repo"].save.await_args.args[0]
        assert record.login_at == T0
        ticking_clock.now.assert_called_once()

    async def test_unknown_user_and_wrong_password_are_indistinguishable(
        self, clock
    ):
        unknown, _ = create_handler(clock, credential=None)
        wrong, _ = create_handler(clock, create_credential(), password_ok=False)

        first = await unknown.handle(login_command())
        second = await wrong.handle(login_command())

        assert first.error == second.error

    async def test_inactive_account_is_rejected_before_password_check(self, clock):
        handler, mocks = create_handler(clock, create_credential(is_active=False))

        result = await handler.handle(login_command())

        assert isinstance(result.error, AccountInactiveError)
        mocks["password_service"].verify_password.assert_not_called()
        mocks["attempt_tracker"].record_failure.assert_not_awaited()

    async def test_locked_account_is_rejected_before_password_check(self, clock):
        handler, mocks = create_handler(clock, create_credential(is_locked=True))

        result = await handler.handle(login_command())

        assert isinstance(result.error, AccountLockedError)
        mocks["password_service"].verify_password.assert_not_called()
        record = mocks["login_audit_repo"].save.await_args.args[0]
        assert record.failure_reason == LoginFailureReason.ACCOUNT_LOCKED

    async def test_failed_login_is_logged_without_password(self, clock):
        handler, mocks = create_handler(clock, create_credential(), password_ok=False)

        await handler.handle(login_command(password="hunter2-secret"))

        logged = str(mocks["logger"].warning.call_args_list)
        assert "hunter2-secret" not in logged
