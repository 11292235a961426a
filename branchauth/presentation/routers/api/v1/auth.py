"""Authentication and session management router.

Endpoints:
    POST   /api/v1/auth/login                  - Authenticate, open a session
    POST   /api/v1/auth/refresh                - Rotate the refresh token
    POST   /api/v1/auth/logout                 - End the current session
    GET    /api/v1/auth/sessions               - List active sessions
    GET    /api/v1/auth/sessions/current       - The caller's session
    GET    /api/v1/auth/sessions/count         - Count active sessions
    DELETE /api/v1/auth/sessions/others        - Revoke all but the current
    DELETE /api/v1/auth/sessions/{session_id}  - Revoke one session
    DELETE /api/v1/auth/sessions               - Revoke all sessions

Every authentication failure is answered with the same generic 401.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, Response

from branchauth.application.commands import (
    LoginUser,
    LogoutUser,
    RefreshAccessToken,
    RevokeAllUserSessions,
    RevokeSession,
)
from branchauth.application.commands.handlers import (
    LoginUserHandler,
    LogoutUserHandler,
    RefreshAccessTokenHandler,
    RevokeAllSessionsHandler,
    RevokeSessionHandler,
)
from branchauth.application.queries import (
    CountActiveSessions,
    GetCurrentSession,
    ListActiveSessions,
)
from branchauth.application.queries.handlers import ListActiveSessionsHandler
from branchauth.core.container import (
    get_list_active_sessions_handler,
    get_logger,
    get_login_user_handler,
    get_logout_user_handler,
    get_refresh_token_handler,
    get_revoke_all_sessions_handler,
    get_revoke_session_handler,
)
from branchauth.core.result import Failure, Success
from branchauth.domain.protocols import LoggerProtocol
from branchauth.presentation.routers.api.middleware.auth_dependencies import (
    CurrentUser,
    get_current_user,
)
from branchauth.presentation.routers.api.v1.errors import (
    ErrorResponseBuilder,
    ProblemDetails,
)
from branchauth.schemas import (
    LoginRequest,
    LoginResponseSchema,
    RefreshRequest,
    SessionCountResponse,
    SessionListResponse,
    SessionResponse,
    TokenResponseSchema,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])

_AUTH_ERROR_RESPONSES: dict[int | str, dict[str, object]] = {
    401: {"description": "Authentication failed", "model": ProblemDetails},
}


def get_client_ip(request: Request) -> str:
    """Client IP: first X-Forwarded-For hop, else the socket peer."""
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        first_hop = forwarded_for.split(",")[0].strip()
        if first_hop:
            return first_hop
    return request.client.host if request.client else "unknown"


# =============================================================================
# Login / refresh / logout
# =============================================================================


@router.post(
    "/login",
    response_model=LoginResponseSchema,
    responses=_AUTH_ERROR_RESPONSES,
    summary="Log in",
)
async def login(
    request: Request,
    data: LoginRequest,
    handler: Annotated[LoginUserHandler, Depends(get_login_user_handler)],
    logger: Annotated[LoggerProtocol, Depends(get_logger)],
) -> LoginResponseSchema | JSONResponse:
    """Authenticate with username/password and open a new session.

    POST /api/v1/auth/login → 200 OK
    """
    command = LoginUser(
        username=data.username,
        password=data.password,
        ip_address=get_client_ip(request),
        user_agent=request.headers.get("user-agent"),
        device_id=data.device_id,
    )

    match await handler.handle(command):
        case Success(value=response):
            return LoginResponseSchema.from_dto(response)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error, request, logger)


@router.post(
    "/refresh",
    response_model=TokenResponseSchema,
    responses=_AUTH_ERROR_RESPONSES,
    summary="Refresh tokens",
)
async def refresh(
    request: Request,
    data: RefreshRequest,
    handler: Annotated[RefreshAccessTokenHandler, Depends(get_refresh_token_handler)],
    logger: Annotated[LoggerProtocol, Depends(get_logger)],
) -> TokenResponseSchema | JSONResponse:
    """Exchange a refresh token for a new pair (one-time use).

    POST /api/v1/auth/refresh → 200 OK

    Replaying a refresh token revokes every session of its owner.
    """
    command = RefreshAccessToken(
        access_token=data.access_token,
        refresh_token=data.refresh_token,
        ip_address=get_client_ip(request),
        user_agent=request.headers.get("user-agent"),
    )

    match await handler.handle(command):
        case Success(value=response):
            return TokenResponseSchema.from_dto(response)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error, request, logger)


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=_AUTH_ERROR_RESPONSES,
    summary="Log out",
)
async def logout(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    handler: Annotated[LogoutUserHandler, Depends(get_logout_user_handler)],
) -> Response:
    """End the caller's current session.

    POST /api/v1/auth/logout → 204 No Content
    """
    await handler.handle(
        LogoutUser(session_id=current_user.session_id, user_id=current_user.user_id)
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =============================================================================
# Sessions
# =============================================================================


@router.get(
    "/sessions",
    response_model=SessionListResponse,
    responses=_AUTH_ERROR_RESPONSES,
    summary="List active sessions",
)
async def list_sessions(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    handler: Annotated[
        ListActiveSessionsHandler, Depends(get_list_active_sessions_handler)
    ],
) -> SessionListResponse:
    """GET /api/v1/auth/sessions → 200 OK (current session flagged)."""
    result = await handler.handle(
        ListActiveSessions(
            user_id=current_user.user_id,
            current_session_id=current_user.session_id,
        )
    )
    sessions = result.value if isinstance(result, Success) else []
    return SessionListResponse(
        sessions=[SessionResponse.from_entity(session) for session in sessions],
        total_count=len(sessions),
    )


@router.get(
    "/sessions/current",
    response_model=SessionResponse,
    responses={
        **_AUTH_ERROR_RESPONSES,
        404: {"description": "Session not active", "model": ProblemDetails},
    },
    summary="Get current session",
)
async def get_current_session(
    request: Request,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    handler: Annotated[
        ListActiveSessionsHandler, Depends(get_list_active_sessions_handler)
    ],
    logger: Annotated[LoggerProtocol, Depends(get_logger)],
) -> SessionResponse | JSONResponse:
    """GET /api/v1/auth/sessions/current → 200 OK / 404 Not Found."""
    query = GetCurrentSession(
        user_id=current_user.user_id, session_id=current_user.session_id
    )
    match await handler.handle_current(query):
        case Success(value=session):
            return SessionResponse.from_entity(session)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error, request, logger)


@router.get(
    "/sessions/count",
    response_model=SessionCountResponse,
    responses=_AUTH_ERROR_RESPONSES,
    summary="Count active sessions",
)
async def count_sessions(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    handler: Annotated[
        ListActiveSessionsHandler, Depends(get_list_active_sessions_handler)
    ],
) -> SessionCountResponse:
    result = await handler.handle_count(
        CountActiveSessions(user_id=current_user.user_id)
    )
    return SessionCountResponse(
        count=result.value if isinstance(result, Success) else 0
    )


# Declared before /sessions/{session_id} so "others" is not taken as an id.
@router.delete(
    "/sessions/others",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=_AUTH_ERROR_RESPONSES,
    summary="Revoke other sessions",
)
async def revoke_other_sessions(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    handler: Annotated[
        RevokeAllSessionsHandler, Depends(get_revoke_all_sessions_handler)
    ],
) -> Response:
    """Log out everywhere except the current session."""
    await handler.handle(
        RevokeAllUserSessions(
            user_id=current_user.user_id,
            except_session_id=current_user.session_id,
        )
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/sessions/{session_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=_AUTH_ERROR_RESPONSES,
    summary="Revoke session",
)
async def revoke_session(
    session_id: str,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    handler: Annotated[RevokeSessionHandler, Depends(get_revoke_session_handler)],
) -> Response:
    """Revoke one of the caller's sessions.

    Sessions that are unknown or belong to someone else are ignored, so
    the response never reveals whether a session id exists.
    """
    await handler.handle(
        RevokeSession(user_id=current_user.user_id, session_id=session_id)
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/sessions",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=_AUTH_ERROR_RESPONSES,
    summary="Revoke all sessions",
)
async def revoke_all_sessions(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    handler: Annotated[
        RevokeAllSessionsHandler, Depends(get_revoke_all_sessions_handler)
    ],
) -> Response:
    """Log out everywhere, including the current session."""
    await handler.handle(RevokeAllUserSessions(user_id=current_user.user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
