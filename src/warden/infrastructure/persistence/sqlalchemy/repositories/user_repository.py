"""SQLAlchemy implementation of UserRepository."""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from warden.domain.shared.time import ensure_tz_aware, utc_now
from warden.domain.user import (
    User,
    UserAlreadyExistsError,
    UserDeletionConflictError,
    UserRepository,
)
from warden.infrastructure.persistence.sqlalchemy.models import UserModel
from warden.infrastructure.persistence.sqlalchemy.repositories.integrity import (
    is_foreign_key_violation,
    parse_unique_violation,
)

logger = logging.getLogger(__name__)


class UserRepositorySQLAlchemy(UserRepository):
    """SQLAlchemy implementation of the UserRepository interface."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, user_id: UUID) -> Optional[User]:
        model = await self._find_live_model_by_id(user_id)

        if model is None:
            return None

        return self._map_to_domain(model)

    async def find_by_identifier(self, identifier: str) -> Optional[User]:
        value = identifier.strip()
        if not value:
            return None

        stmt = select(UserModel).where(
            or_(UserModel.email == value.lower(), UserModel.username == value),
            UserModel.deleted_at.is_(None),
        )
        result = await self._session.execute(stmt)
        model = result.scalars().first()

        if model is None:
            return None

        return self._map_to_domain(model)

    async def exists_by_email(self, email: str) -> bool:
        stmt = (
            select(func.count())
            .select_from(UserModel)
            .where(UserModel.email == email.strip().lower())
        )
        result = await self._session.execute(stmt)
        return result.scalar_one() > 0

    async def exists_by_username(self, username: str) -> bool:
        stmt = (
            select(func.count())
            .select_from(UserModel)
            .where(UserModel.username == username.strip())
        )
        result = await self._session.execute(stmt)
        return result.scalar_one() > 0

    async def save(self, user: User) -> None:
        existing = await self._find_model_by_id(user.id)

        try:
            if existing:
                self._update_model(existing, user)
                logger.debug("Updated user: %s", user.id)
            else:
                model = self._map_to_model(user)
                self._session.add(model)
                logger.info("Created user: %s (username: %s)", user.id, user.username)

            await self._session.flush()
        except IntegrityError as e:
            violation = parse_unique_violation(e)
            if violation is None:
                raise
            field, value = violation
            if value is None:
                value = str(getattr(user, field, "") or "")
            raise UserAlreadyExistsError(field, value) from e

    async def list_all(self) -> list[User]:
        stmt = (
            select(UserModel)
            .where(UserModel.deleted_at.is_(None))
            .order_by(UserModel.created_at)
        )
        result = await self._session.execute(stmt)
        models = result.scalars().all()
        return [self._map_to_domain(model) for model in models]

    async def soft_delete(self, user_id: UUID) -> bool:
        now = utc_now()
        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id, UserModel.deleted_at.is_(None))
            .values(deleted_at=now, updated_at=now)
            .execution_options(synchronize_session="fetch")
        )
        result = await self._session.execute(stmt)
        await self._session.flush()
        deleted = bool(result.rowcount)  # type: ignore[attr-defined]
        if deleted:
            logger.info("Soft-deleted user: %s", user_id)
        return deleted

    async def hard_delete(self, user_id: UUID) -> bool:
        model = await self._find_live_model_by_id(user_id)

        if model is None:
            return False

        try:
            await self._session.delete(model)
            await self._session.flush()
        except IntegrityError as e:
            if is_foreign_key_violation(e):
                raise UserDeletionConflictError(user_id) from e
            raise

        logger.info("Deleted user: %s", user_id)
        return True

    async def count(self) -> int:
        stmt = (
            select(func.count())
            .select_from(UserModel)
            .where(UserModel.deleted_at.is_(None))
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def _find_model_by_id(self, user_id: UUID) -> Optional[UserModel]:
        stmt = select(UserModel).where(UserModel.id == user_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def _find_live_model_by_id(self, user_id: UUID) -> Optional[UserModel]:
        stmt = select(UserModel).where(
            UserModel.id == user_id,
            UserModel.deleted_at.is_(None),
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _map_to_domain(self, model: UserModel) -> User:
        return User.reconstitute(
            id=model.id,
            email=model.email,
            username=model.username,
            password_hash=model.password_hash,
            name=model.name,
            role=model.role,
            status=model.status,
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
            deleted_at=(
                ensure_tz_aware(model.deleted_at) if model.deleted_at else None
            ),
        )

    def _map_to_model(self, user: User) -> UserModel:
        return UserModel(
            id=user.id,
            email=user.email,
            username=user.username,
            name=user.name,
            password_hash=user.password_hash,
            role=user.role.value,
            status=user.status.value,
            created_at=user.created_at,
            updated_at=user.updated_at,
            deleted_at=user.deleted_at,
        )

    def _update_model(self, model: UserModel, user: User) -> None:
        model.email = user.email
        model.username = user.username
        model.name = user.name
        model.password_hash = user.password_hash
        model.role = user.role.value
        model.status = user.status.value
        model.updated_at = user.updated_at
        model.deleted_at = user.deleted_at
