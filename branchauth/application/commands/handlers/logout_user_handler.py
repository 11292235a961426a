"""LogoutUser command handler.

Flow:
1. Find the session's refresh tokens
2. No unrevoked token (unknown or already revoked session): log a warning
   and succeed
3. Close the session's open login audit record
4. Revoke the session (tokens revoked, session blacklisted)

Idempotent: logging out twice, or logging out an unknown session, is a
successful no-op.
"""

from branchauth.application.commands.auth_commands import LogoutUser
from branchauth.application.services import TokenIssuer
from branchauth.core.constants import REASON_USER_LOGOUT
from branchauth.core.errors import DomainError
from branchauth.core.result import Result, Success
from branchauth.domain.protocols import (
    ClockProtocol,
    LoggerProtocol,
    LoginAuditRepository,
    SessionStore,
)


class LogoutUserHandler:
    """Handler for LogoutUser command."""

    def __init__(
        self,
        session_store: SessionStore,
        token_issuer: TokenIssuer,
        login_audit_repo: LoginAuditRepository,
        clock: ClockProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._session_store = session_store
        self._token_issuer = token_issuer
        self._login_audit_repo = login_audit_repo
        self._clock = clock
        self._logger = logger

    async def handle(self, cmd: LogoutUser) -> Result[int, DomainError]:
        """Handle LogoutUser command.

        Returns:
            Success(number of refresh tokens revoked). Never fails.
        """
        now = self._clock.now()
        tokens = await self._session_store.find_by_session_id(cmd.session_id)
        if not any(not token.is_revoked for token in tokens):
            self._logger.warning(
                "logout_session_not_active",
                session_id=cmd.session_id,
                user_id=str(cmd.user_id) if cmd.user_id else None,
                known_session=bool(tokens),
            )
            return Success(value=0)

        try:
            await self._login_audit_repo.close_session(cmd.session_id, now)
        except Exception as e:
            self._logger.error(
                "login_audit_close_failed", error=e, session_id=cmd.session_id
            )

        revoked = await self._token_issuer.revoke(
            cmd.session_id, REASON_USER_LOGOUT, now=now
        )
        self._logger.info(
            "logout_succeeded",
            session_id=cmd.session_id,
            user_id=str(tokens[0].user_id),
        )
        return Success(value=revoked)
