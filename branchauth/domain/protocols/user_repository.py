"""UserRepository protocol for the credential boundary.

Port (interface) for hexagonal architecture. Only the operations the
authentication flows need: lookup and lockout-state updates. User
management (CRUD, role assignment) lives elsewhere.
"""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from branchauth.domain.entities import Credential


class UserRepository(Protocol):
    """Credential repository protocol (port).

    This is a Protocol (not ABC) for structural typing.
    Implementations don't need to inherit from this.
    """

    async def find_by_id(self, user_id: UUID) -> Credential | None:
        """Find a credential by user id."""
        ...

    async def find_by_username(self, username: str) -> Credential | None:
        """Find a credential by exact username."""
        ...

    async def save(self, credential: Credential) -> None:
        """Create a user record (provisioning and tests)."""
        ...

    async def record_failed_login(
        self, user_id: UUID, failed_at: datetime, lockout_threshold: int
    ) -> Credential | None:
        """Atomically count one failed login.

        Increments the counter in a single statement, stamps the first
        failure of a streak, and sets the lock flag once the new count
        reaches ``lockout_threshold``.

        Returns:
            Updated credential, or None if the user vanished.
        """
        ...

    async def reset_failed_logins(self, user_id: UUID) -> Credential | None:
        """Clear the failure counter and the first-failure timestamp."""
        ...
