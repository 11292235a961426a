"""Security adapters: password hashing, access token codec, refresh tokens."""

from branchauth.infrastructure.security.bcrypt_password_service import (
    BcryptPasswordService,
)
from branchauth.infrastructure.security.jwt_service import JWTService
from branchauth.infrastructure.security.refresh_token_service import (
    RefreshTokenService,
)

__all__ = ["BcryptPasswordService", "JWTService", "RefreshTokenService"]
