"""JWT authentication dependencies.

FastAPI dependencies that validate the bearer access token and expose the
caller's identity to protected routes.

Usage:
    @router.get("/sessions")
    async def list_sessions(
        current_user: CurrentUser = Depends(get_current_user),
    ):
        return {"user_id": str(current_user.user_id)}
"""

from dataclasses import dataclass
from typing import Annotated
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from branchauth.core.container import get_clock, get_token_codec
from branchauth.core.result import Failure, Success
from branchauth.domain.protocols import ClockProtocol, TokenCodecProtocol

# auto_error=True returns 401 if no token provided
bearer_scheme = HTTPBearer(auto_error=True)


@dataclass(frozen=True, slots=True, kw_only=True)
class CurrentUser:
    """Authenticated caller, built once per request from validated claims.

    Attributes:
        user_id: From ``sub``.
        username: From ``username``.
        email: From ``email``.
        first_name: From ``given_name``.
        last_name: From ``family_name``.
        branch_id: From ``branch_id``.
        roles: From ``roles``.
        session_id: From ``session_id``.
        token_jti: From ``jti``.
    """

    user_id: UUID
    username: str
    email: str
    first_name: str
    last_name: str
    branch_id: UUID
    roles: tuple[str, ...]
    session_id: str
    token_jti: str


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
    token_codec: Annotated[TokenCodecProtocol, Depends(get_token_codec)],
    clock: Annotated[ClockProtocol, Depends(get_clock)],
) -> CurrentUser:
    """Validate the bearer token (signature, issuer, audience and lifetime).

    Raises:
        HTTPException 401: Missing, invalid or expired token.
    """
    match token_codec.decode(credentials.credentials, clock.now()):
        case Success(value=claims):
            return CurrentUser(
                user_id=claims.user_id,
                username=claims.username,
                email=claims.email,
                first_name=claims.first_name,
                last_name=claims.last_name,
                branch_id=claims.branch_id,
                roles=claims.roles,
                session_id=claims.session_id,
                token_jti=claims.jwt_id,
            )
        case Failure():
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Authentication failed",
                headers={"WWW-Authenticate": "Bearer"},
            )
