"""Domain entities for authentication and session lifecycle.

Pure business logic entities with no framework dependencies.
"""

from branchauth.domain.entities.active_session import ActiveSession
from branchauth.domain.entities.blacklist_entry import BlacklistEntry
from branchauth.domain.entities.credential import Credential
from branchauth.domain.entities.login_audit_record import LoginAuditRecord
from branchauth.domain.entities.refresh_token import RefreshToken, RefreshTokenState

__all__ = [
    "ActiveSession",
    "BlacklistEntry",
    "Credential",
    "LoginAuditRecord",
    "RefreshToken",
    "RefreshTokenState",
]
