"""Commands: use cases that change state."""

from warden.application.commands.admin import (
    DeleteUserCommand,
    UpdateUserRoleCommand,
    UpdateUserStatusCommand,
)
from warden.application.commands.user import (
    DeleteAccountCommand,
    UpdateProfileCommand,
)

__all__ = [
    "DeleteAccountCommand",
    "DeleteUserCommand",
    "UpdateProfileCommand",
    "UpdateUserRoleCommand",
    "UpdateUserStatusCommand",
]
