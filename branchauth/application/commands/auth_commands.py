"""Authentication commands (CQRS write operations).

Commands represent user intent to change system state.
All commands are immutable (frozen=True) and use keyword-only arguments (kw_only=True).

Pattern:
- Commands are data containers (no logic)
- Handlers execute business logic and return Result types
"""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class LoginUser:
    """Authenticate with username/password and open a session.

    Attributes:
        username: Login name as submitted.
        password: Plaintext password (never logged).
        ip_address: Client IP.
        user_agent: Client user agent.
        device_id: Optional client-supplied device identifier.

    Example:
        >>> command = LoginUser(
        ...     username="alice",
        ...     password="P@ss1",
        ...     ip_address="10.0.0.7",
        ...     user_agent="Mozilla/5.0",
        ... )
        >>> result = await handler.handle(command)
    """

    username: str
    password: str
    ip_address: str
    user_agent: str | None = None
    device_id: str | None = None


@dataclass(frozen=True, kw_only=True)
class RefreshAccessToken:
    """Exchange a refresh token (plus its paired access token) for a new pair.

    Attributes:
        access_token: The access token issued with the refresh token,
            normally already expired.
        refresh_token: Opaque refresh token value.
        ip_address: Client IP.
        user_agent: Client user agent.
    """

    access_token: str
    refresh_token: str
    ip_address: str
    user_agent: str | None = None


@dataclass(frozen=True, kw_only=True)
class LogoutUser:
    """End one session.

    Attributes:
        session_id: Session to end (taken from the caller's access token).
        user_id: Caller, for logging.
    """

    session_id: str
    user_id: UUID | None = None
