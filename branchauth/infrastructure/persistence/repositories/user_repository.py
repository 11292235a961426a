"""UserRepository - SQLAlchemy implementation of the credential boundary."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import func, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from branchauth.domain.entities import Credential
from branchauth.infrastructure.persistence.base import as_utc
from branchauth.infrastructure.persistence.models.user import UserModel, UserRoleModel


def _to_domain(model: UserModel) -> Credential:
    """Convert database model to domain entity."""
    return Credential(
        id=model.id,
        username=model.username,
        email=model.email,
        first_name=model.first_name,
        last_name=model.last_name,
        password_hash=model.password_hash,
        branch_id=model.branch_id,
        is_active=model.is_active,
        is_locked=model.is_locked,
        failed_login_attempts=model.failed_login_attempts,
        first_failed_login_at=as_utc(model.first_failed_login_at),
        roles=[role.role_code for role in model.roles if role.is_active],
        created_at=as_utc(model.created_at),
        updated_at=as_utc(model.updated_at),
    )


class UserRepository:
    """SQLAlchemy implementation of UserRepository.

    Lockout updates are single UPDATE statements computed from the stored
    row, so two concurrent failures both count.

    Example:
        >>> async with database.get_session() as session:
        ...     repo = UserRepository(session)
        ...     credential = await repo.find_by_username("alice")
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, user_id: UUID) -> Credential | None:
        return await self._fetch(user_id)

    async def find_by_username(self, username: str) -> Credential | None:
        stmt = select(UserModel).where(UserModel.username == username)
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_domain(model) if model else None

    async def save(self, credential: Credential) -> None:
        """Create a user row with its roles.

        Raises:
            SQLAlchemyError: After rolling back (e.g. duplicate username).
        """
        model = UserModel(
            id=credential.id,
            username=credential.username,
            email=credential.email,
            first_name=credential.first_name,
            last_name=credential.last_name,
            password_hash=credential.password_hash,
            branch_id=credential.branch_id,
            is_active=credential.is_active,
            is_locked=credential.is_locked,
            failed_login_attempts=credential.failed_login_attempts,
            first_failed_login_at=credential.first_failed_login_at,
            roles=[UserRoleModel(role_code=code) for code in credential.roles],
        )
        self.session.add(model)
        await self._commit()

    async def record_failed_login(
        self, user_id: UUID, failed_at: datetime, lockout_threshold: int
    ) -> Credential | None:
        """Count one failure and lock at the threshold in a single statement.

        Column references on the right-hand side read the pre-update row.
        """
        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(
                failed_login_attempts=UserModel.failed_login_attempts + 1,
                first_failed_login_at=func.coalesce(
                    UserModel.first_failed_login_at, failed_at
                ),
                is_locked=or_(
                    UserModel.is_locked,
                    UserModel.failed_login_attempts + 1 >= lockout_threshold,
                ),
            )
            .execution_options(synchronize_session=False)
        )
        await self._execute_and_commit(stmt)
        return await self._fetch(user_id)

    async def reset_failed_logins(self, user_id: UUID) -> Credential | None:
        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(failed_login_attempts=0, first_failed_login_at=None)
            .execution_options(synchronize_session=False)
        )
        await self._execute_and_commit(stmt)
        return await self._fetch(user_id)

    async def _fetch(self, user_id: UUID) -> Credential | None:
        stmt = (
            select(UserModel)
            .where(UserModel.id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_domain(model) if model else None

    async def _execute_and_commit(self, stmt) -> None:  # type: ignore[no-untyped-def]
        try:
            await self.session.execute(stmt)
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            raise

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            raise
