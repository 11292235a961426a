"""FastAPI application entry point.

Wires the session guard middleware, the RFC 7807 exception handlers and
the v1 routers.

Usage:
    uvicorn branchauth.main:app
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from branchauth.core.config import get_settings
from branchauth.presentation.routers.api.middleware.session_guard import (
    BlacklistCheck,
    SessionGuardMiddleware,
)
from branchauth.presentation.routers.api.v1 import v1_router
from branchauth.presentation.routers.api.v1.errors import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Dispose of the database engine on shutdown."""
    yield

    from branchauth.core.container import get_database

    await get_database().close()


def create_app(is_blacklisted: BlacklistCheck | None = None) -> FastAPI:
    """Build the application.

    Args:
        is_blacklisted: Session blacklist predicate override for the
            session guard (defaults to the database-backed check).
    """
    settings = get_settings()
    application = FastAPI(
        title=settings.app_name,
        description="Branch staff authentication and session service",
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        debug=settings.debug,
        lifespan=lifespan,
    )

    application.add_middleware(SessionGuardMiddleware, is_blacklisted=is_blacklisted)
    register_exception_handlers(application)
    application.include_router(v1_router)

    @application.get("/health")
    async def health() -> dict[str, str]:
        """Health check endpoint for monitoring and load balancers."""
        return {"status": "healthy"}

    return application


app = create_app()
