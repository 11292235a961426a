"""Commands (CQRS write side)."""

from branchauth.application.commands.auth_commands import (
    LoginUser,
    LogoutUser,
    RefreshAccessToken,
)
from branchauth.application.commands.session_commands import (
    RevokeAllUserSessions,
    RevokeSession,
)

__all__ = [
    "LoginUser",
    "LogoutUser",
    "RefreshAccessToken",
    "RevokeAllUserSessions",
    "RevokeSession",
]
