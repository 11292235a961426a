"""Command handlers."""

from branchauth.application.commands.handlers.login_user_handler import (
    LoginUserHandler,
)
from branchauth.application.commands.handlers.logout_user_handler import (
    LogoutUserHandler,
)
from branchauth.application.commands.handlers.refresh_access_token_handler import (
    RefreshAccessTokenHandler,
)
from branchauth.application.commands.handlers.revoke_all_sessions_handler import (
    RevokeAllSessionsHandler,
)
from branchauth.application.commands.handlers.revoke_session_handler import (
    RevokeSessionHandler,
)

__all__ = [
    "LoginUserHandler",
    "LogoutUserHandler",
    "RefreshAccessTokenHandler",
    "RevokeAllSessionsHandler",
    "RevokeSessionHandler",
]
