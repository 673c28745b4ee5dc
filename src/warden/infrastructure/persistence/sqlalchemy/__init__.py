"""SQLAlchemy implementation for warden persistence.

Provides:
- Base: Declarative base for all models
- UserModel / SessionModel: table mappings
- UserRepositorySQLAlchemy / SessionRepositorySQLAlchemy: repository
  implementations bound to an AsyncSession
"""

from warden.infrastructure.persistence.sqlalchemy.models import (
    Base,
    SessionModel,
    UserModel,
)
from warden.infrastructure.persistence.sqlalchemy.repositories import (
    SessionRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)

__all__ = [
    "Base",
    "SessionModel",
    "SessionRepositorySQLAlchemy",
    "UserModel",
    "UserRepositorySQLAlchemy",
]
