# ruff: noqa: E501 - Long import paths in __init__.py re-exports
"""SQLAlchemy repository implementations."""

from warden.infrastructure.persistence.sqlalchemy.repositories.session_repository import (
    SessionRepositorySQLAlchemy,
)
from warden.infrastructure.persistence.sqlalchemy.repositories.user_repository import (
    UserRepositorySQLAlchemy,
)

__all__ = [
    "SessionRepositorySQLAlchemy",
    "UserRepositorySQLAlchemy",
]
