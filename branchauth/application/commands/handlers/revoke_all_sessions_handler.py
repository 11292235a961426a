"""RevokeAllUserSessions command handler.

Without ``except_session_id`` every session of the user is revoked,
including the caller's. With it, the named session survives ("log out
everywhere else").
"""

from branchauth.application.commands.session_commands import RevokeAllUserSessions
from branchauth.application.services import TokenIssuer
from branchauth.core.constants import (
    REASON_ALL_SESSIONS_REVOKED,
    REASON_OTHER_SESSIONS_REVOKED,
)
from branchauth.core.errors import DomainError
from branchauth.core.result import Result, Success


class RevokeAllSessionsHandler:
    """Handler for RevokeAllUserSessions command."""

    def __init__(self, token_issuer: TokenIssuer) -> None:
        self._token_issuer = token_issuer

    async def handle(self, cmd: RevokeAllUserSessions) -> Result[int, DomainError]:
        """Returns Success(number of refresh tokens revoked)."""
        if cmd.except_session_id is None:
            revoked = await self._token_issuer.revoke_all_for_user(
                cmd.user_id, REASON_ALL_SESSIONS_REVOKED
            )
        else:
            revoked = await self._token_issuer.revoke_all_for_user_except(
                cmd.user_id, cmd.except_session_id, REASON_OTHER_SESSIONS_REVOKED
            )
        return Success(value=revoked)
