"""Database models.

Importing this package registers every table on ``BaseModel.metadata``
(Alembic autogenerate and ``Database.create_all`` rely on it).
"""

from branchauth.infrastructure.persistence.models.login_log import UserLoginLogModel
from branchauth.infrastructure.persistence.models.refresh_token import (
    RefreshTokenModel,
)
from branchauth.infrastructure.persistence.models.token_blacklist import (
    TokenBlacklistModel,
)
from branchauth.infrastructure.persistence.models.user import UserModel, UserRoleModel

__all__ = [
    "RefreshTokenModel",
    "TokenBlacklistModel",
    "UserLoginLogModel",
    "UserModel",
    "UserRoleModel",
]
