"""Infrastructure dependency factories.

Application-scoped singletons (``lru_cache``):
- Logging (structlog console adapter)
- Clock
- Database (SQLAlchemy async engine)
- Password hashing (bcrypt)
- Access token codec (JWT)
- Refresh token generation

Request-scoped:
- get_db_session() (FastAPI dependency)
"""

from collections.abc import AsyncGenerator
from functools import lru_cache
from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import AsyncSession

from branchauth.core.config import get_settings
from branchauth.core.enums import Environment
from branchauth.infrastructure.persistence.database import Database

if TYPE_CHECKING:
    from branchauth.domain.protocols import (
        ClockProtocol,
        LoggerProtocol,
        PasswordHashingProtocol,
        RefreshTokenServiceProtocol,
        TokenCodecProtocol,
    )


# ============================================================================
# Application-Scoped Dependencies (Singletons)
# ============================================================================


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON)
    """
    from branchauth.infrastructure.logging.console_adapter import ConsoleAdapter

    settings = get_settings()
    use_json = settings.environment != Environment.DEVELOPMENT
    return ConsoleAdapter(use_json=use_json, level=settings.log_level)


@lru_cache()
def get_clock() -> "ClockProtocol":
    """Get the wall clock singleton."""
    from branchauth.infrastructure.clock.system_clock import SystemClock

    return SystemClock()


@lru_cache()
def get_database() -> Database:
    """Get database manager singleton (app-scoped).

    Use get_db_session() for per-request sessions.
    """
    settings = get_settings()
    return Database(
        database_url=settings.database_url,
        echo=settings.db_echo,
    )


@lru_cache()
def get_password_service() -> "PasswordHashingProtocol":
    """Get password hashing service singleton.

    Usage:
        password_service = get_password_service()
        password_hash = password_service.hash_password("correct horse")
    """
    from branchauth.infrastructure.security.bcrypt_password_service import (
        BcryptPasswordService,
    )

    return BcryptPasswordService(cost_factor=get_settings().bcrypt_rounds)


@lru_cache()
def get_token_codec() -> "TokenCodecProtocol":
    """Get access token codec singleton.

    The signing secret is read once here and kept for the process lifetime.

    Raises:
        ValueError: If the configured secret is shorter than 32 bytes.
    """
    from branchauth.infrastructure.security.jwt_service import JWTService

    settings = get_settings()
    return JWTService(
        secret_key=settings.secret_key,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
    )


@lru_cache()
def get_refresh_token_service() -> "RefreshTokenServiceProtocol":
    """Get refresh token generator singleton."""
    from branchauth.infrastructure.security.refresh_token_service import (
        RefreshTokenService,
    )

    return RefreshTokenService()


# ============================================================================
# Request-Scoped Dependencies (Per-Request)
# ============================================================================


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session (request-scoped).

    Usage:
        @router.post("/login")
        async def login(session: AsyncSession = Depends(get_db_session)):
            ...
    """
    db = get_database()
    async with db.get_session() as session:
        yield session
