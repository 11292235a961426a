"""Queries (CQRS read side)."""

from branchauth.application.queries.session_queries import (
    CountActiveSessions,
    GetCurrentSession,
    ListActiveSessions,
)

__all__ = ["CountActiveSessions", "GetCurrentSession", "ListActiveSessions"]
