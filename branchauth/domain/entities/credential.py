"""Credential domain entity.

The authentication-relevant slice of a user account. The full user record
(profile editing, branch assignment, role management) is owned by the user
management subsystem; this entity only carries what login needs.

Lockout:
    - Every failed password verification increments the failure counter
    - The first failure of a streak stamps ``first_failed_login_at``
    - Reaching ``LOCKOUT_THRESHOLD`` cumulative failures locks the account
    - A successful login resets the counter and the timestamp
    - There is no time window: the counter only resets on success, and a
      locked account stays locked until an administrator unlocks it
"""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from branchauth.core.constants import LOCKOUT_THRESHOLD


@dataclass
class Credential:
    """User credential with lockout state.

    Attributes:
        id: User identifier (access token ``sub`` claim).
        username: Login name (unique).
        email: Email address.
        first_name: Given name.
        last_name: Family name.
        password_hash: bcrypt hash (algorithm, cost, salt and key encoded together).
        branch_id: Branch the user belongs to.
        is_active: Inactive accounts cannot log in or refresh.
        is_locked: Set by the lockout policy, cleared only administratively.
        failed_login_attempts: Cumulative failures since the last success.
        first_failed_login_at: When the current failure streak started.
        roles: Active role codes (carried in tokens, not evaluated here).

    Example:
        >>> credential = Credential(
        ...     id=uuid7(),
        ...     username="alice",
        ...     email="alice@example.com",
        ...     first_name="Alice",
        ...     last_name="Liddell",
        ...     password_hash="$2b$12$...",
        ...     branch_id=uuid7(),
        ... )
        >>> credential.can_attempt_login()
        True
    """

    id: UUID
    username: str
    email: str
    first_name: str
    last_name: str
    password_hash: str
    branch_id: UUID
    is_active: bool = True
    is_locked: bool = False
    failed_login_attempts: int = 0
    first_failed_login_at: datetime | None = None
    roles: list[str] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def can_attempt_login(self) -> bool:
        """Check whether a password may be verified for this account.

        Returns:
            bool: True if the account is active and not locked.
        """
        return self.is_active and not self.is_locked

    def has_failed_logins(self) -> bool:
        """Check whether there is a failure streak to reset."""
        return self.failed_login_attempts > 0 or self.first_failed_login_at is not None

    def failures_until_lockout(self) -> int:
        """Remaining failed attempts before the account locks.

        Returns:
            int: Zero once the threshold is reached.
        """
        return max(LOCKOUT_THRESHOLD - self.failed_login_attempts, 0)
