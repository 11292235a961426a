"""Authentication and session domain errors.

Architecture:
    - Domain layer errors (no infrastructure dependencies)
    - Returned inside Failure (railway-oriented programming), never raised
    - Each error carries a stable ErrorCode; the HTTP layer collapses all of
      them into one generic 401 (SessionNotFoundError: 404) and only logs
      the code

Usage:
    from branchauth.domain.errors import InvalidCredentialsError
    from branchauth.core.result import Failure

    if not password_service.verify_password(password, credential.password_hash):
        return Failure(error=InvalidCredentialsError())
"""

from dataclasses import dataclass

from branchauth.core.enums import ErrorCode
from branchauth.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class InvalidCredentialsError(DomainError):
    """Unknown username or wrong password.

    Both cases share this error so callers cannot enumerate usernames.
    """

    code: ErrorCode = ErrorCode.INVALID_CREDENTIALS
    message: str = "Invalid username or password"


@dataclass(frozen=True, slots=True, kw_only=True)
class AccountInactiveError(DomainError):
    """Account has been deactivated."""

    code: ErrorCode = ErrorCode.ACCOUNT_INACTIVE
    message: str = "Account is inactive"


@dataclass(frozen=True, slots=True, kw_only=True)
class AccountLockedError(DomainError):
    """Account locked by the failed-login policy."""

    code: ErrorCode = ErrorCode.ACCOUNT_LOCKED
    message: str = "Account is locked"


@dataclass(frozen=True, slots=True, kw_only=True)
class InvalidTokenError(DomainError):
    """Access token failed signature, issuer, audience or claim checks."""

    code: ErrorCode = ErrorCode.TOKEN_INVALID
    message: str = "Invalid access token"


@dataclass(frozen=True, slots=True, kw_only=True)
class InvalidRefreshTokenError(DomainError):
    """Refresh token unknown, mismatched, already used or revoked."""

    code: ErrorCode = ErrorCode.REFRESH_TOKEN_INVALID
    message: str = "Invalid refresh token"


@dataclass(frozen=True, slots=True, kw_only=True)
class RefreshTokenExpiredError(DomainError):
    """Refresh token is past its expiry."""

    code: ErrorCode = ErrorCode.REFRESH_TOKEN_EXPIRED
    message: str = "Refresh token expired"


@dataclass(frozen=True, slots=True, kw_only=True)
class SessionNotFoundError(DomainError):
    """Session has no refresh token records.

    Returned by the current-session query (404). Logout and revocation of
    an unknown session succeed as no-ops instead.
    """

    code: ErrorCode = ErrorCode.SESSION_NOT_FOUND
    message: str = "Session not found"
