"""RefreshAccessToken command handler.

Thin pass-through to TokenIssuer.rotate(); the state machine, reuse
detection and the compare-and-set all live there.
"""

from branchauth.application.commands.auth_commands import RefreshAccessToken
from branchauth.application.dtos import TokenResponse
from branchauth.application.services import TokenIssuer
from branchauth.core.errors import DomainError
from branchauth.core.result import Failure, Result, Success


class RefreshAccessTokenHandler:
    """Handler for RefreshAccessToken command."""

    def __init__(self, token_issuer: TokenIssuer) -> None:
        self._token_issuer = token_issuer

    async def handle(
        self, cmd: RefreshAccessToken
    ) -> Result[TokenResponse, DomainError]:
        """Rotate the refresh token.

        Returns:
            Success(TokenResponse) with a brand-new pair, or the Failure
            produced by rotation.
        """
        result = await self._token_issuer.rotate(
            cmd.access_token,
            cmd.refresh_token,
            cmd.ip_address,
            cmd.user_agent,
        )
        match result:
            case Success(value=tokens):
                return Success(value=TokenResponse.from_issued(tokens))
            case Failure(error=error):
                return Failure(error=error)
