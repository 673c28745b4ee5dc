"""SQLAlchemy implementation of SessionRepository."""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from warden.domain.session import Device, SessionRepository, UserSession
from warden.domain.shared.time import ensure_tz_aware, utc_now
from warden.infrastructure.persistence.sqlalchemy.models import SessionModel

logger = logging.getLogger(__name__)


class SessionRepositorySQLAlchemy(SessionRepository):
    """SQLAlchemy implementation of the SessionRepository interface."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def save(self, session: UserSession) -> None:
        self._session.add(self._map_to_model(session))
        await self._session.flush()
        logger.debug("Stored session %s for user %s", session.id, session.user_id)

    async def find_active(self, user_id: UUID, token: str) -> Optional[UserSession]:
        stmt = select(SessionModel).where(
            SessionModel.user_id == user_id,
            SessionModel.token == token,
            SessionModel.expiry_date > utc_now(),
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._map_to_domain(model)

    async def list_for_user(
        self,
        user_id: UUID,
        exclude_token: Optional[str] = None,
    ) -> list[UserSession]:
        stmt = select(SessionModel).where(
            SessionModel.user_id == user_id,
            SessionModel.expiry_date > utc_now(),
        )
        if exclude_token is not None:
            stmt = stmt.where(SessionModel.token != exclude_token)
        stmt = stmt.order_by(SessionModel.created_at.desc())

        result = await self._session.execute(stmt)
        return [self._map_to_domain(model) for model in result.scalars().all()]

    async def delete_by_token(self, user_id: UUID, token: str) -> bool:
        stmt = delete(SessionModel).where(
            SessionModel.user_id == user_id,
            SessionModel.token == token,
        )
        return await self._execute_delete(stmt) > 0

    async def delete_by_id(self, user_id: UUID, session_id: UUID) -> bool:
        stmt = delete(SessionModel).where(
            SessionModel.user_id == user_id,
            SessionModel.id == session_id,
        )
        return await self._execute_delete(stmt) > 0

    async def delete_others(self, user_id: UUID, keep_token: str) -> int:
        stmt = delete(SessionModel).where(
            SessionModel.user_id == user_id,
            SessionModel.token != keep_token,
        )
        return await self._execute_delete(stmt)

    async def delete_all_for_user(self, user_id: UUID) -> int:
        stmt = delete(SessionModel).where(SessionModel.user_id == user_id)
        return await self._execute_delete(stmt)

    async def delete_expired(self) -> int:
        stmt = delete(SessionModel).where(SessionModel.expiry_date <= utc_now())
        return await self._execute_delete(stmt)

    async def _execute_delete(self, stmt) -> int:
        result = await self._session.execute(
            stmt.execution_options(synchronize_session=False),
        )
        await self._session.flush()
        return result.rowcount or 0  # type: ignore[attr-defined]

    def _map_to_domain(self, model: SessionModel) -> UserSession:
        return UserSession(
            id=model.id,
            user_id=model.user_id,
            token=model.token,
            ip=model.ip,
            device=Device.from_dict(model.device),
            expiry_date=ensure_tz_aware(model.expiry_date),
            created_at=ensure_tz_aware(model.created_at),
        )

    def _map_to_model(self, session: UserSession) -> SessionModel:
        return SessionModel(
            id=session.id,
            user_id=session.user_id,
            token=session.token,
            ip=session.ip,
            device=session.device.to_dict(),
            expiry_date=session.expiry_date,
            created_at=session.created_at,
        )
