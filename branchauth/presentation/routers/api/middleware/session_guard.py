"""Session blacklist middleware.

Rejects any request whose bearer token belongs to a blacklisted (revoked)
session, before routing. The token is decoded WITHOUT verification purely
to read ``session_id``; full validation still happens in the route's
``get_current_user`` dependency.

Pass-through cases:
    - No ``Authorization: Bearer`` header
    - Undecodable token or no ``session_id`` claim
    - Health and documentation paths

Blacklist lookup errors propagate (the request fails rather than letting a
revoked session through).

Usage:
    from branchauth.presentation.routers.api.middleware.session_guard import (
        SessionGuardMiddleware,
    )

    app.add_middleware(SessionGuardMiddleware)
"""

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

import jwt
from jwt.exceptions import InvalidTokenError as JWTInvalidTokenError
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from branchauth.core.config import get_settings
from branchauth.core.constants import BEARER_PREFIX
from branchauth.presentation.routers.api.v1.errors.error_response_builder import (
    AUTHENTICATION_FAILED_DETAIL,
)
from branchauth.presentation.routers.api.v1.errors.problem_details import (
    ProblemDetails,
)

if TYPE_CHECKING:
    from branchauth.domain.protocols import LoggerProtocol

BlacklistCheck = Callable[[str], Awaitable[bool]]

_SKIP_PATHS = frozenset({"/health", "/docs", "/redoc", "/openapi.json"})


async def _check_blacklist_in_database(session_id: str) -> bool:
    from branchauth.core.container import build_token_issuer, get_database

    async with get_database().get_session() as session:
        return await build_token_issuer(session).is_blacklisted(session_id)


class SessionGuardMiddleware(BaseHTTPMiddleware):
    """Starlette middleware enforcing the session blacklist.

    Attributes:
        _is_blacklisted: Async predicate on a session id (defaults to the
            database-backed TokenIssuer check).
        _logger: LoggerProtocol (lazy loaded).
    """

    def __init__(
        self, app: ASGIApp, is_blacklisted: BlacklistCheck | None = None
    ) -> None:
        """Initialize session guard.

        Args:
            app: The ASGI application to wrap.
            is_blacklisted: Blacklist predicate override.
        """
        super().__init__(app)
        self._is_blacklisted = is_blacklisted or _check_blacklist_in_database
        self._logger: LoggerProtocol | None = None

    def _get_logger(self) -> "LoggerProtocol":
        if self._logger is None:
            from branchauth.core.container import get_logger

            self._logger = get_logger()
        return self._logger

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        if request.url.path in _SKIP_PATHS:
            return await call_next(request)

        session_id = self._extract_session_id(request)
        if session_id is None:
            return await call_next(request)

        if await self._is_blacklisted(session_id):
            self._get_logger().warning(
                "blacklisted_session_rejected",
                session_id=session_id,
                path=request.url.path,
            )
            return self._unauthorized(request)

        return await call_next(request)

    @staticmethod
    def _extract_session_id(request: Request) -> str | None:
        authorization = request.headers.get("authorization", "")
        if not authorization.startswith(BEARER_PREFIX):
            return None

        token = authorization[len(BEARER_PREFIX) :].strip()
        try:
            payload = jwt.decode(token, options={"verify_signature": False})
        except JWTInvalidTokenError:
            return None

        session_id = payload.get("session_id")
        return session_id if isinstance(session_id, str) and session_id else None

    @staticmethod
    def _unauthorized(request: Request) -> JSONResponse:
        problem = ProblemDetails(
            type=f"{get_settings().api_base_url}/errors/unauthorized",
            title="Authentication Required",
            status=401,
            detail=AUTHENTICATION_FAILED_DETAIL,
            instance=str(request.url.path),
        )
        return JSONResponse(
            status_code=401,
            content=problem.model_dump(exclude_none=True),
            headers={"WWW-Authenticate": "Bearer"},
        )
