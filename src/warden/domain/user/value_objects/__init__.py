"""Value objects for the user domain."""

from warden.domain.user.value_objects.email import EMAIL_PATTERN, Email
from warden.domain.user.value_objects.user_role import UserRole
from warden.domain.user.value_objects.user_status import UserStatus
from warden.domain.user.value_objects.username import USERNAME_PATTERN, Username

__all__ = [
    "EMAIL_PATTERN",
    "USERNAME_PATTERN",
    "Email",
    "UserRole",
    "UserStatus",
    "Username",
]
