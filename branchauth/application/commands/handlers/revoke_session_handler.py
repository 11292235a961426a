"""RevokeSession command handler.

Revokes one of the caller's own sessions. A session that does not exist or
belongs to someone else is a logged no-op, indistinguishable to the caller
from a successful revocation.
"""

from branchauth.application.commands.session_commands import RevokeSession
from branchauth.application.services import TokenIssuer
from branchauth.core.constants import REASON_SESSION_REVOKED
from branchauth.core.errors import DomainError
from branchauth.core.result import Result, Success
from branchauth.domain.protocols import LoggerProtocol, SessionStore


class RevokeSessionHandler:
    """Handler for RevokeSession command."""

    def __init__(
        self,
        session_store: SessionStore,
        token_issuer: TokenIssuer,
        logger: LoggerProtocol,
    ) -> None:
        self._session_store = session_store
        self._token_issuer = token_issuer
        self._logger = logger

    async def handle(self, cmd: RevokeSession) -> Result[int, DomainError]:
        tokens = await self._session_store.find_by_session_id(cmd.session_id)
        if not tokens or tokens[0].user_id != cmd.user_id:
            self._logger.warning(
                "revoke_session_not_found",
                session_id=cmd.session_id,
                user_id=str(cmd.user_id),
            )
            return Success(value=0)

        revoked = await self._token_issuer.revoke(
            cmd.session_id, REASON_SESSION_REVOKED
        )
        return Success(value=revoked)
