"""API v1 routers.

Resources:
    /api/v1/auth  - Login, refresh, logout and session management
"""

from fastapi import APIRouter

from branchauth.core.config import get_settings
from branchauth.presentation.routers.api.v1.auth import router as auth_router

v1_router = APIRouter(prefix=get_settings().api_v1_prefix)
v1_router.include_router(auth_router)

__all__ = [
    "v1_router",
]
