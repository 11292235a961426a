"""SQLAlchemy repository adapters."""

from branchauth.infrastructure.persistence.repositories.login_audit_repository import (
    LoginAuditRepository,
)
from branchauth.infrastructure.persistence.repositories.session_store_repository import (
    SessionStoreRepository,
)
from branchauth.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

__all__ = ["LoginAuditRepository", "SessionStoreRepository", "UserRepository"]
