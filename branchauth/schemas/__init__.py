"""Request/response schemas for API endpoints.

Usage:
    from branchauth.schemas import LoginRequest, SessionListResponse
"""

from branchauth.schemas.auth_schemas import (
    LoginRequest,
    LoginResponseSchema,
    RefreshRequest,
    TokenResponseSchema,
    UserProfileSchema,
)
from branchauth.schemas.session_schemas import (
    SessionCountResponse,
    SessionListResponse,
    SessionResponse,
)

__all__ = [
    "LoginRequest",
    "LoginResponseSchema",
    "RefreshRequest",
    "SessionCountResponse",
    "SessionListResponse",
    "SessionResponse",
    "TokenResponseSchema",
    "UserProfileSchema",
]
