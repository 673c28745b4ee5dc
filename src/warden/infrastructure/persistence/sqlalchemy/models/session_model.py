"""SQLAlchemy model for UserSession entities."""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import JSON, DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from warden.domain.shared.time import utc_now
from warden.infrastructure.persistence.sqlalchemy.models.base import Base


class SessionModel(Base):
    """SQLAlchemy model for persisting login sessions."""

    __tablename__ = "sessions"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    user_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    token: Mapped[str] = mapped_column(String(1024), unique=True, nullable=False)
    ip: Mapped[str] = mapped_column(String(64), nullable=False)
    device: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    expiry_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )

    def __repr__(self) -> str:
        return (
            f"<SessionModel(id={self.id}, user_id={self.user_id}, "
            f"expiry_date={self.expiry_date})>"
        )
