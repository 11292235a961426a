"""Authentication handler factories (request-scoped).

Each factory builds a handler around repositories bound to the request's
database session. Used with FastAPI ``Depends``.
"""

from datetime import timedelta
from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from branchauth.core.config import get_settings
from branchauth.core.container.infrastructure import (
    get_clock,
    get_db_session,
    get_logger,
    get_password_service,
    get_refresh_token_service,
    get_token_codec,
)

if TYPE_CHECKING:
    from branchauth.application.commands.handlers import (
        LoginUserHandler,
        LogoutUserHandler,
        RefreshAccessTokenHandler,
        RevokeAllSessionsHandler,
        RevokeSessionHandler,
    )
    from branchauth.application.queries.handlers import ListActiveSessionsHandler
    from branchauth.application.services import TokenIssuer


def build_token_issuer(session: AsyncSession) -> "TokenIssuer":
    """Wire a TokenIssuer to repositories on ``session``."""
    from branchauth.application.services import TokenIssuer
    from branchauth.infrastructure.persistence.repositories import (
        SessionStoreRepository,
        UserRepository,
    )

    settings = get_settings()
    return TokenIssuer(
        session_store=SessionStoreRepository(session=session),
        user_repo=UserRepository(session=session),
        token_codec=get_token_codec(),
        refresh_token_service=get_refresh_token_service(),
        clock=get_clock(),
        logger=get_logger(),
        access_token_ttl=timedelta(minutes=settings.access_token_expire_minutes),
        refresh_token_ttl=timedelta(days=settings.refresh_token_expire_days),
    )


async def get_login_user_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "LoginUserHandler":
    """Get LoginUser command handler (request-scoped)."""
    from branchauth.application.commands.handlers import LoginUserHandler
    from branchauth.application.services import LoginAttemptTracker
    from branchauth.infrastructure.persistence.repositories import (
        LoginAuditRepository,
        UserRepository,
    )

    user_repo = UserRepository(session=session)
    logger = get_logger()

    return LoginUserHandler(
        user_repo=user_repo,
        password_service=get_password_service(),
        token_issuer=build_token_issuer(session),
        attempt_tracker=LoginAttemptTracker(user_repo=user_repo, logger=logger),
        login_audit_repo=LoginAuditRepository(session=session),
        clock=get_clock(),
        logger=logger,
    )


async def get_refresh_token_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "RefreshAccessTokenHandler":
    """Get RefreshAccessToken command handler (request-scoped)."""
    from branchauth.application.commands.handlers import RefreshAccessTokenHandler

    return RefreshAccessTokenHandler(token_issuer=build_token_issuer(session))


async def get_logout_user_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "LogoutUserHandler":
    """Get LogoutUser command handler (request-scoped)."""
    from branchauth.application.commands.handlers import LogoutUserHandler
    from branchauth.infrastructure.persistence.repositories import (
        LoginAuditRepository,
        SessionStoreRepository,
    )

    return LogoutUserHandler(
        session_store=SessionStoreRepository(session=session),
        token_issuer=build_token_issuer(session),
        login_audit_repo=LoginAuditRepository(session=session),
        clock=get_clock(),
        logger=get_logger(),
    )


async def get_revoke_session_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "RevokeSessionHandler":
    """Get RevokeSession command handler (request-scoped)."""
    from branchauth.application.commands.handlers import RevokeSessionHandler
    from branchauth.infrastructure.persistence.repositories import (
        SessionStoreRepository,
    )

    return RevokeSessionHandler(
        session_store=SessionStoreRepository(session=session),
        token_issuer=build_token_issuer(session),
        logger=get_logger(),
    )


async def get_revoke_all_sessions_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "RevokeAllSessionsHandler":
    """Get RevokeAllUserSessions command handler (request-scoped)."""
    from branchauth.application.commands.handlers import RevokeAllSessionsHandler

    return RevokeAllSessionsHandler(token_issuer=build_token_issuer(session))


async def get_list_active_sessions_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "ListActiveSessionsHandler":
    """Get active session query handler (request-scoped)."""
    from branchauth.application.queries.handlers import ListActiveSessionsHandler
    from branchauth.infrastructure.persistence.repositories import (
        SessionStoreRepository,
    )

    return ListActiveSessionsHandler(
        session_store=SessionStoreRepository(session=session),
        clock=get_clock(),
    )
