"""Domain errors package.

Usage:
    from branchauth.domain.errors import InvalidCredentialsError, AccountLockedError
"""

from branchauth.domain.errors.auth_errors import (
    AccountInactiveError,
    AccountLockedError,
    InvalidCredentialsError,
    InvalidRefreshTokenError,
    InvalidTokenError,
    RefreshTokenExpiredError,
    SessionNotFoundError,
)

__all__ = [
    "AccountInactiveError",
    "AccountLockedError",
    "InvalidCredentialsError",
    "InvalidRefreshTokenError",
    "InvalidTokenError",
    "RefreshTokenExpiredError",
    "SessionNotFoundError",
]
