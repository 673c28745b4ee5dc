from warden.application.commands.admin.delete_user_command import DeleteUserCommand
from warden.application.commands.admin.update_user_role_command import (
    UpdateUserRoleCommand,
)
from warden.application.commands.admin.update_user_status_command import (
    UpdateUserStatusCommand,
)

__all__ = [
    "DeleteUserCommand",
    "UpdateUserRoleCommand",
    "UpdateUserStatusCommand",
]
