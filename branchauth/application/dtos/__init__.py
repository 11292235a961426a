"""Application DTOs."""

from branchauth.application.dtos.auth_dtos import (
    IssuedTokens,
    LoginResponse,
    TokenResponse,
    UserProfile,
)

__all__ = ["IssuedTokens", "LoginResponse", "TokenResponse", "UserProfile"]
