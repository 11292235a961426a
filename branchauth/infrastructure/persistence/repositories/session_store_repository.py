"""SessionStoreRepository - SQLAlchemy implementation of SessionStore.

Refresh token rows and session blacklist entries. Every write commits
before returning.
"""

from collections.abc import Sequence
from datetime import datetime
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from branchauth.domain.entities import BlacklistEntry, RefreshToken
from branchauth.infrastructure.persistence.base import as_utc
from branchauth.infrastructure.persistence.models.refresh_token import (
    RefreshTokenModel,
)
from branchauth.infrastructure.persistence.models.token_blacklist import (
    TokenBlacklistModel,
)


def _to_domain(model: RefreshTokenModel) -> RefreshToken:
    """Convert database model to domain entity."""
    return RefreshToken(
        id=model.id,
        user_id=model.user_id,
        token_hash=model.token_hash,
        jwt_id=model.jwt_id,
        session_id=model.session_id,
        expires_at=as_utc(model.expires_at),
        created_at=as_utc(model.created_at),
        is_used=model.is_used,
        used_at=as_utc(model.used_at),
        is_revoked=model.is_revoked,
        revoked_at=as_utc(model.revoked_at),
        revoked_reason=model.revoked_reason,
        ip_address=model.ip_address,
        user_agent=model.user_agent,
        device_id=model.device_id,
    )


def _to_model(token: RefreshToken) -> RefreshTokenModel:
    return RefreshTokenModel(
        id=token.id,
        user_id=token.user_id,
        token_hash=token.token_hash,
        jwt_id=token.jwt_id,
        session_id=token.session_id,
        expires_at=token.expires_at,
        created_at=token.created_at,
        is_used=token.is_used,
        used_at=token.used_at,
        is_revoked=token.is_revoked,
        revoked_at=token.revoked_at,
        revoked_reason=token.revoked_reason,
        ip_address=token.ip_address,
        user_agent=token.user_agent,
        device_id=token.device_id,
    )


class SessionStoreRepository:
    """SQLAlchemy implementation of SessionStore.

    Example:
        >>> async with database.get_session() as session:
        ...     store = SessionStoreRepository(session)
        ...     await store.is_blacklisted(session_id, clock.now())
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def save_refresh_token(self, token: RefreshToken) -> None:
        self.session.add(_to_model(token))
        await self._commit()

    async def find_refresh_token(
        self, token_hash: str, jwt_id: str
    ) -> RefreshToken | None:
        stmt = select(RefreshTokenModel).where(
            RefreshTokenModel.token_hash == token_hash,
            RefreshTokenModel.jwt_id == jwt_id,
        )
        result = await self.session.execute(
            stmt.execution_options(populate_existing=True)
        )
        model = result.scalar_one_or_none()
        return _to_domain(model) if model else None

    async def mark_used(self, token: RefreshToken, used_at: datetime) -> bool:
        """Conditional UPDATE: exactly one concurrent caller sees rowcount 1."""
        stmt = (
            update(RefreshTokenModel)
            .where(
                RefreshTokenModel.id == token.id,
                RefreshTokenModel.is_used.is_(False),
                RefreshTokenModel.is_revoked.is_(False),
            )
            .values(is_used=True, used_at=used_at)
            .execution_options(synchronize_session=False)
        )
        won = await self._execute_and_commit(stmt) == 1
        if won:
            token.is_used = True
            token.used_at = used_at
        return won

    async def mark_revoked(
        self, tokens: Sequence[RefreshToken], revoked_at: datetime, reason: str
    ) -> int:
        token_ids = [token.id for token in tokens]
        if not token_ids:
            return 0

        stmt = (
            update(RefreshTokenModel)
            .where(
                RefreshTokenModel.id.in_(token_ids),
                RefreshTokenModel.is_revoked.is_(False),
            )
            .values(is_revoked=True, revoked_at=revoked_at, revoked_reason=reason)
            .execution_options(synchronize_session=False)
        )
        return await self._execute_and_commit(stmt)

    async def find_active_by_user(
        self, user_id: UUID, now: datetime
    ) -> list[RefreshToken]:
        stmt = (
            select(RefreshTokenModel)
            .where(
                RefreshTokenModel.user_id == user_id,
                RefreshTokenModel.is_used.is_(False),
                RefreshTokenModel.is_revoked.is_(False),
                RefreshTokenModel.expires_at > now,
            )
            .order_by(RefreshTokenModel.created_at.desc())
        )
        return await self._fetch_all(stmt)

    async def find_unrevoked_by_user(self, user_id: UUID) -> list[RefreshToken]:
        stmt = select(RefreshTokenModel).where(
            RefreshTokenModel.user_id == user_id,
            RefreshTokenModel.is_revoked.is_(False),
        )
        return await self._fetch_all(stmt)

    async def find_by_session_id(self, session_id: str) -> list[RefreshToken]:
        stmt = (
            select(RefreshTokenModel)
            .where(RefreshTokenModel.session_id == session_id)
            .order_by(RefreshTokenModel.created_at.asc())
        )
        return await self._fetch_all(stmt)

    async def add_blacklist_entry(self, entry: BlacklistEntry) -> None:
        self.session.add(
            TokenBlacklistModel(
                session_id=entry.session_id,
                user_id=entry.user_id,
                reason=entry.reason,
                blacklisted_at=entry.blacklisted_at,
                expires_at=entry.expires_at,
            )
        )
        await self._commit()

    async def is_blacklisted(self, session_id: str, now: datetime) -> bool:
        stmt = (
            select(TokenBlacklistModel.id)
            .where(
                TokenBlacklistModel.session_id == session_id,
                TokenBlacklistModel.expires_at > now,
            )
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def _fetch_all(self, stmt) -> list[RefreshToken]:  # type: ignore[no-untyped-def]
        result = await self.session.execute(
            stmt.execution_options(populate_existing=True)
        )
        return [_to_domain(model) for model in result.scalars().all()]

    async def _execute_and_commit(self, stmt) -> int:  # type: ignore[no-untyped-def]
        try:
            result = await self.session.execute(stmt)
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            raise
        return result.rowcount

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            raise
