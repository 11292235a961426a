"""Authentication DTOs (Data Transfer Objects).

Response dataclasses carried from handlers back to the presentation layer.

DTOs:
    - IssuedTokens: Result of TokenIssuer.issue / rotate
    - UserProfile: Public projection of the authenticated user
    - LoginResponse: Result of LoginUser
    - TokenResponse: Result of RefreshAccessToken
"""

from dataclasses import dataclass, field
from uuid import UUID

from branchauth.core.constants import TOKEN_TYPE
from branchauth.domain.entities import Credential


@dataclass(frozen=True, kw_only=True)
class IssuedTokens:
    """A freshly minted access/refresh token pair.

    Attributes:
        access_token: Signed access token.
        refresh_token: Opaque refresh token (plain value, shown once).
        expires_in: Access token lifetime in seconds.
        session_id: Session the pair belongs to.
        token_type: Always "Bearer".
    """

    access_token: str
    refresh_token: str
    expires_in: int
    session_id: str
    token_type: str = TOKEN_TYPE


@dataclass(frozen=True, kw_only=True)
class UserProfile:
    """Public user projection returned on login."""

    id: UUID
    username: str
    email: str
    first_name: str
    last_name: str
    branch_id: UUID
    roles: list[str] = field(default_factory=list)

    @classmethod
    def from_credential(cls, credential: Credential) -> "UserProfile":
        return cls(
            id=credential.id,
            username=credential.username,
            email=credential.email,
            first_name=credential.first_name,
            last_name=credential.last_name,
            branch_id=credential.branch_id,
            roles=list(credential.roles),
        )


@dataclass(frozen=True, kw_only=True)
class LoginResponse:
    """Successful login: token pair plus the user projection."""

    access_token: str
    refresh_token: str
    expires_in: int
    user: UserProfile
    token_type: str = TOKEN_TYPE


@dataclass(frozen=True, kw_only=True)
class TokenResponse:
    """Successful refresh: the rotated token pair."""

    access_token: str
    refresh_token: str
    expires_in: int
    token_type: str = TOKEN_TYPE

    @classmethod
    def from_issued(cls, tokens: IssuedTokens) -> "TokenResponse":
        return cls(
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token,
            expires_in=tokens.expires_in,
            token_type=tokens.token_type,
        )
