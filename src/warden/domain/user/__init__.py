"""User domain manages accounts.

This domain handles:
- User aggregate (id, email, username, display name, role, status)
- Credentials (the bcrypt hash lives on the aggregate, never serialized)
- Soft deletion
"""

from warden.domain.user.aggregates import User
from warden.domain.user.exceptions import (
    CannotDeleteSelfError,
    CannotDemoteSelfError,
    InvalidEmailError,
    InvalidUsernameError,
    UserAlreadyExistsError,
    UserDeletionConflictError,
    UserNotFoundError,
)
from warden.domain.user.repositories import UserRepository
from warden.domain.user.value_objects import (
    Email,
    UserRole,
    UserStatus,
    Username,
)

__all__ = [
    "CannotDeleteSelfError",
    "CannotDemoteSelfError",
    "Email",
    "InvalidEmailError",
    "InvalidUsernameError",
    "User",
    "UserAlreadyExistsError",
    "UserDeletionConflictError",
    "UserNotFoundError",
    "UserRepository",
    "UserRole",
    "UserStatus",
    "Username",
]
