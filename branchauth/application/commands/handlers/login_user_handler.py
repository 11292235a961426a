"""LoginUser command handler.

Flow:
1. Look up the credential by username (unknown -> InvalidCredentialsError)
2. Reject inactive (AccountInactiveError) and locked (AccountLockedError)
3. Verify password; on mismatch count the failure (may lock the account)
   and return InvalidCredentialsError
4. On success reset the failure streak, issue tokens, audit the session

Every attempt writes one login audit record. Audit writes are best-effort:
a failing audit store is logged and never changes the outcome.

Unknown username and wrong password return the same error so callers
cannot enumerate accounts; the distinction only appears in logs and the
audit trail.
"""

from datetime import datetime
from uuid import UUID

from branchauth.application.commands.auth_commands import LoginUser
from branchauth.application.dtos import LoginResponse, UserProfile
from branchauth.application.services import LoginAttemptTracker, TokenIssuer
from branchauth.core.errors import DomainError
from branchauth.core.result import Failure, Result, Success
from branchauth.domain.entities import LoginAuditRecord
from branchauth.domain.errors import (
    AccountInactiveError,
    AccountLockedError,
    InvalidCredentialsError,
)
from branchauth.domain.protocols import (
    ClockProtocol,
    LoggerProtocol,
    LoginAuditRepository,
    PasswordHashingProtocol,
    UserRepository,
)


class LoginFailureReason:
    """Audit failure reasons (internal, never returned to clients)."""

    USER_NOT_FOUND = "user_not_found"
    ACCOUNT_INACTIVE = "account_inactive"
    ACCOUNT_LOCKED = "account_locked"
    INVALID_PASSWORD = "invalid_password"


class LoginUserHandler:
    """Handler for LoginUser command."""

    def __init__(
        self,
        user_repo: UserRepository,
        password_service: PasswordHashingProtocol,
        token_issuer: TokenIssuer,
        attempt_tracker: LoginAttemptTracker,
        login_audit_repo: LoginAuditRepository,
        clock: ClockProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._user_repo = user_repo
        self._password_service = password_service
        self._token_issuer = token_issuer
        self._attempt_tracker = attempt_tracker
        self._login_audit_repo = login_audit_repo
        self._clock = clock
        self._logger = logger

    async def handle(self, cmd: LoginUser) -> Result[LoginResponse, DomainError]:
        """Handle LoginUser command.

        Returns:
            Success(LoginResponse) with the token pair and user projection.
            Failure(InvalidCredentialsError | AccountInactiveError |
            AccountLockedError) otherwise.
        """
        now = self._clock.now()

        credential = await self._user_repo.find_by_username(cmd.username)
        if credential is None:
            return await self._reject(
                cmd,
                now,
                LoginFailureReason.USER_NOT_FOUND,
                InvalidCredentialsError(),
            )

        if not credential.is_active:
            return await self._reject(
                cmd,
                now,
                LoginFailureReason.ACCOUNT_INACTIVE,
                AccountInactiveError(),
                credential.id,
            )

        if credential.is_locked:
            return await self._reject(
                cmd,
                now,
                LoginFailureReason.ACCOUNT_LOCKED,
                AccountLockedError(),
                credential.id,
            )

        if not self._password_service.verify_password(
            cmd.password, credential.password_hash
        ):
            await self._attempt_tracker.record_failure(credential, now)
            return await self._reject(
                cmd,
                now,
                LoginFailureReason.INVALID_PASSWORD,
                InvalidCredentialsError(),
                credential.id,
            )

        credential = await self._attempt_tracker.record_success(credential)
        tokens = await self._token_issuer.issue(
            credential,
            cmd.ip_address,
            cmd.user_agent,
            device_id=cmd.device_id,
            now=now,
        )

        await self._audit(
            LoginAuditRecord.succeeded(
                username=cmd.username,
                user_id=credential.id,
                ip_address=cmd.ip_address,
                user_agent=cmd.user_agent,
                session_id=tokens.session_id,
                at=now,
            )
        )
        self._logger.info(
            "login_succeeded",
            user_id=str(credential.id),
            session_id=tokens.session_id,
            ip_address=cmd.ip_address,
        )

        return Success(
            value=LoginResponse(
                access_token=tokens.access_token,
                refresh_token=tokens.refresh_token,
                expires_in=tokens.expires_in,
                token_type=tokens.token_type,
                user=UserProfile.from_credential(credential),
            )
        )

    async def _reject(
        self,
        cmd: LoginUser,
        now: datetime,
        reason: str,
        error: DomainError,
        user_id: UUID | None = None,
    ) -> Failure[DomainError]:
        await self._audit(
            LoginAuditRecord.failed(
                username=cmd.username,
                user_id=user_id,
                ip_address=cmd.ip_address,
                user_agent=cmd.user_agent,
                reason=reason,
                at=now,
            )
        )
        self._logger.warning(
            "login_failed",
            username=cmd.username,
            reason=reason,
            ip_address=cmd.ip_address,
        )
        return Failure(error=error)

    async def _audit(self, record: LoginAuditRecord) -> None:
        try:
            await self._login_audit_repo.save(record)
        except Exception as e:
            self._logger.error(
                "login_audit_write_failed",
                error=e,
                username=record.username,
                is_successful=record.is_successful,
            )
