"""SQLAlchemy models."""

from warden.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)
from warden.infrastructure.persistence.sqlalchemy.models.session_model import (
    SessionModel,
)
from warden.infrastructure.persistence.sqlalchemy.models.user_model import UserModel

__all__ = [
    "Base",
    "SessionModel",
    "TimestampMixin",
    "UserModel",
]
