"""Dependency injection container (composition root).

Every collaborator is built here and injected; nothing else reaches for
global state.

Usage:
    from branchauth.core.container import get_logger, get_login_user_handler
"""

from branchauth.core.config import get_settings
from branchauth.core.container.auth_handlers import (
    build_token_issuer,
    get_list_active_sessions_handler,
    get_login_user_handler,
    get_logout_user_handler,
    get_refresh_token_handler,
    get_revoke_all_sessions_handler,
    get_revoke_session_handler,
)
from branchauth.core.container.infrastructure import (
    get_clock,
    get_database,
    get_db_session,
    get_logger,
    get_password_service,
    get_refresh_token_service,
    get_token_codec,
)

__all__ = [
    "build_token_issuer",
    "get_clock",
    "get_database",
    "get_db_session",
    "get_list_active_sessions_handler",
    "get_logger",
    "get_login_user_handler",
    "get_logout_user_handler",
    "get_password_service",
    "get_refresh_token_handler",
    "get_refresh_token_service",
    "get_revoke_all_sessions_handler",
    "get_revoke_session_handler",
    "get_settings",
    "get_token_codec",
]
