"""LoginAuditRepository - SQLAlchemy implementation of the login audit log."""

from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from branchauth.domain.entities import LoginAuditRecord
from branchauth.infrastructure.persistence.models.login_log import UserLoginLogModel


class LoginAuditRepository:
    """Append-only writer for user_login_logs."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def save(self, record: LoginAuditRecord) -> None:
        self.session.add(
            UserLoginLogModel(
                username=record.username,
                user_id=record.user_id,
                ip_address=record.ip_address,
                user_agent=record.user_agent,
                login_type=record.login_type,
                is_successful=record.is_successful,
                failure_reason=record.failure_reason,
                session_id=record.session_id,
                login_at=record.login_at,
                logout_at=record.logout_at,
            )
        )
        try:
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            raise

    async def close_session(self, session_id: str, logout_at: datetime) -> int:
        """Stamp logout_at on the latest open successful login of the session."""
        open_record = (
            select(UserLoginLogModel.id)
            .where(
                UserLoginLogModel.session_id == session_id,
                UserLoginLogModel.is_successful.is_(True),
                UserLoginLogModel.logout_at.is_(None),
            )
            .order_by(UserLoginLogModel.login_at.desc())
            .limit(1)
        )
        result = await self.session.execute(open_record)
        record_id = result.scalar_one_or_none()
        if record_id is None:
            return 0

        stmt = (
            update(UserLoginLogModel)
            .where(
                UserLoginLogModel.id == record_id,
                UserLoginLogModel.logout_at.is_(None),
            )
            .values(logout_at=logout_at)
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self.session.execute(stmt)
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            raise
        return result.rowcount
