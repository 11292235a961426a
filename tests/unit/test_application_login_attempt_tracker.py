"""Unit tests for LoginAttemptTracker (lockout policy)."""

from dataclasses import replace
from unittest.mock import AsyncMock, Mock

import pytest

from branchauth.application.services import LoginAttemptTracker
from branchauth.core.constants import LOCKOUT_THRESHOLD
from tests.conftest import T0, create_credential


@pytest.mark.unit
class TestLoginAttemptTracker:
    async def test_record_failure_delegates_atomic_increment(self):
        credential = create_credential()
        user_repo = AsyncMock()
        user_repo.record_failed_login.return_value = replace(
            credential, failed_login_attempts=1, first_failed_login_at=T0
        )
        tracker = LoginAttemptTracker(user_repo=user_repo, logger=Mock())

        updated = await tracker.record_failure(credential, T0)

        user_repo.record_failed_login.assert_awaited_once_with(
            credential.id, T0, LOCKOUT_THRESHOLD
        )
        assert updated.failed_login_attempts == 1

    async def test_logs_transition_to_locked(self):
        credential = create_credential(failed_login_attempts=4)
        user_repo = AsyncMock()
        user_repo.record_failed_login.return_value = replace(
            credential, failed_login_attempts=5, is_locked=True
        )
        logger = Mock()
        tracker = LoginAttemptTracker(user_repo=user_repo, logger=logger)

        updated = await tracker.record_failure(credential, T0)

        assert updated.is_locked
        logger.warning.assert_called_once()
        assert logger.warning.call_args.args[0] == "account_locked"

    async def test_failure_below_threshold_does_not_log_lock(self):
        credential = create_credential(failed_login_attempts=1)
        user_repo = AsyncMock()
        user_repo.record_failed_login.return_value = replace(
            credential, failed_login_attempts=2
        )
        logger = Mock()
        tracker = LoginAttemptTracker(user_repo=user_repo, logger=logger)

        await tracker.record_failure(credential, T0)

        logger.warning.assert_not_called()

    async def test_record_failure_keeps_credential_when_row_vanished(self):
        credential = create_credential()
        user_repo = AsyncMock()
        user_repo.record_failed_login.return_value = None
        tracker = LoginAttemptTracker(user_repo=user_repo, logger=Mock())

        assert await tracker.record_failure(credential, T0) is credential

    async def test_record_success_resets_streak(self):
        credential = create_credential(failed_login_attempts=3, first_failed_login_at=T0)
        reset = replace(credential, failed_login_attempts=0, first_failed_login_at=None)
        user_repo = AsyncMock()
        user_repo.reset_failed_logins.return_value = reset
        tracker = LoginAttemptTracker(user_repo=user_repo, logger=Mock())

        assert await tracker.record_success(credential) == reset
        user_repo.reset_failed_logins.assert_awaited_once_with(credential.id)

    async def test_record_success_on_clean_credential_writes_nothing(self):
        credential = create_credential()
        user_repo = AsyncMock()
        tracker = LoginAttemptTracker(user_repo=user_repo, logger=Mock())

        assert await tracker.record_success(credential) is credential
        user_repo.reset_failed_logins.assert_not_awaited()
