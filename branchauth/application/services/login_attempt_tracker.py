"""Failed-login tracking and lockout policy.

Policy:
    - Every failed password verification counts
    - The first failure of a streak records its timestamp
    - LOCKOUT_THRESHOLD cumulative failures lock the account
    - A successful login resets the counter and the timestamp
    - No time window: failures accumulate until a success or an
      administrative unlock
"""

from datetime import datetime

from branchauth.core.constants import LOCKOUT_THRESHOLD
from branchauth.domain.entities import Credential
from branchauth.domain.protocols import LoggerProtocol, UserRepository


class LoginAttemptTracker:
    """Applies the lockout policy through atomic repository updates."""

    def __init__(
        self,
        user_repo: UserRepository,
        logger: LoggerProtocol,
        lockout_threshold: int = LOCKOUT_THRESHOLD,
    ) -> None:
        self._user_repo = user_repo
        self._logger = logger
        self._lockout_threshold = lockout_threshold

    async def record_failure(self, credential: Credential, now: datetime) -> Credential:
        """Count one failed attempt.

        Args:
            credential: Credential as read at the start of the attempt.
            now: Instant of the attempt.

        Returns:
            Credential as stored after the increment.
        """
        updated = await self._user_repo.record_failed_login(
            credential.id, now, self._lockout_threshold
        )
        if updated is None:
            return credential

        if updated.is_locked and not credential.is_locked:
            self._logger.warning(
                "account_locked",
                user_id=str(updated.id),
                failed_login_attempts=updated.failed_login_attempts,
            )
        return updated

    async def record_success(self, credential: Credential) -> Credential:
        """Reset the failure streak (no write when already clean)."""
        if not credential.has_failed_logins():
            return credential

        updated = await self._user_repo.reset_failed_logins(credential.id)
        return updated or credential
