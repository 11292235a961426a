"""Authentication request/response schemas.

Pydantic models for API request validation and response serialization.
Kept separate from domain entities - these are HTTP-layer concerns.

Endpoints:
    POST   /api/v1/auth/login    - Authenticate and open a session
    POST   /api/v1/auth/refresh  - Rotate the refresh token
    POST   /api/v1/auth/logout   - End the current session
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from branchauth.application.dtos import LoginResponse, TokenResponse, UserProfile
from branchauth.core.constants import TOKEN_TYPE


# =============================================================================
# Login
# =============================================================================


class LoginRequest(BaseModel):
    """Request schema for login.

    POST /api/v1/auth/login
    Returns: 200 OK
    """

    username: str = Field(
        ...,
        min_length=1,
        max_length=150,
        description="Login name",
        examples=["alice"],
    )
    password: str = Field(
        ...,
        min_length=1,
        max_length=128,
        description="Password",
        examples=["correct horse battery staple"],
    )
    device_id: str | None = Field(
        default=None,
        max_length=255,
        description="Optional client device identifier",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "username": "alice",
                "password": "correct horse battery staple",
            }
        }
    )


class UserProfileSchema(BaseModel):
    """Public user projection returned on login."""

    id: UUID
    username: str
    email: str
    first_name: str
    last_name: str
    branch_id: UUID
    roles: list[str] = Field(default_factory=list)

    @classmethod
    def from_dto(cls, profile: UserProfile) -> "UserProfileSchema":
        return cls(
            id=profile.id,
            username=profile.username,
            email=profile.email,
            first_name=profile.first_name,
            last_name=profile.last_name,
            branch_id=profile.branch_id,
            roles=list(profile.roles),
        )


class LoginResponseSchema(BaseModel):
    """Response schema for a successful login (200 OK)."""

    access_token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(..., description="Opaque refresh token")
    token_type: str = Field(default=TOKEN_TYPE, description="Token type")
    expires_in: int = Field(..., description="Access token lifetime in seconds")
    user: UserProfileSchema

    @classmethod
    def from_dto(cls, response: LoginResponse) -> "LoginResponseSchema":
        return cls(
            access_token=response.access_token,
            refresh_token=response.refresh_token,
            token_type=response.token_type,
            expires_in=response.expires_in,
            user=UserProfileSchema.from_dto(response.user),
        )


# =============================================================================
# Refresh
# =============================================================================


class RefreshRequest(BaseModel):
    """Request schema for token refresh.

    POST /api/v1/auth/refresh
    Returns: 200 OK

    Both tokens of the pair are required: the access token identifies the
    refresh record (its ``jti``) and may already be expired.
    """

    access_token: str = Field(..., min_length=1, description="Paired access token")
    refresh_token: str = Field(..., min_length=1, description="Refresh token")


class TokenResponseSchema(BaseModel):
    """Response schema for a successful refresh (200 OK)."""

    access_token: str = Field(..., description="New JWT access token")
    refresh_token: str = Field(..., description="New refresh token")
    token_type: str = Field(default=TOKEN_TYPE, description="Token type")
    expires_in: int = Field(..., description="Access token lifetime in seconds")

    @classmethod
    def from_dto(cls, response: TokenResponse) -> "TokenResponseSchema":
        return cls(
            access_token=response.access_token,
            refresh_token=response.refresh_token,
            token_type=response.token_type,
            expires_in=response.expires_in,
        )
