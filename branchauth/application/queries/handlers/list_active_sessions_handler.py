"""Active session query handler.

A session is active while its newest refresh token is not used, not
revoked and not expired.
"""

from uuid import UUID

from branchauth.application.queries.session_queries import (
    CountActiveSessions,
    GetCurrentSession,
    ListActiveSessions,
)
from branchauth.core.errors import DomainError
from branchauth.core.result import Failure, Result, Success
from branchauth.domain.entities import ActiveSession, RefreshToken
from branchauth.domain.errors import SessionNotFoundError
from branchauth.domain.protocols import ClockProtocol, SessionStore


class ListActiveSessionsHandler:
    """Handler for ListActiveSessions, CountActiveSessions and GetCurrentSession."""

    def __init__(self, session_store: SessionStore, clock: ClockProtocol) -> None:
        self._session_store = session_store
        self._clock = clock

    async def handle(
        self, query: ListActiveSessions
    ) -> Result[list[ActiveSession], DomainError]:
        """List sessions newest first, flagging the caller's own."""
        sessions = await self._active_sessions(query.user_id, query.current_session_id)
        return Success(value=sessions)

    async def handle_count(
        self, query: CountActiveSessions
    ) -> Result[int, DomainError]:
        sessions = await self._active_sessions(query.user_id, None)
        return Success(value=len(sessions))

    async def handle_current(
        self, query: GetCurrentSession
    ) -> Result[ActiveSession, DomainError]:
        for session in await self._active_sessions(query.user_id, query.session_id):
            if session.is_current:
                return Success(value=session)
        return Failure(error=SessionNotFoundError())

    async def _active_sessions(
        self, user_id: UUID, current_session_id: str | None
    ) -> list[ActiveSession]:
        tokens = await self._session_store.find_active_by_user(
            user_id, self._clock.now()
        )
        newest_per_session: dict[str, RefreshToken] = {}
        for token in tokens:
            newest_per_session.setdefault(token.session_id, token)
        return [
            ActiveSession.from_token(token, current_session_id)
            for token in newest_per_session.values()
        ]
