"""Query handlers."""

from branchauth.application.queries.handlers.list_active_sessions_handler import (
    ListActiveSessionsHandler,
)

__all__ = ["ListActiveSessionsHandler"]
