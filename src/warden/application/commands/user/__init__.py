from warden.application.commands.user.delete_account_command import (
    DeleteAccountCommand,
)
from warden.application.commands.user.update_profile_command import (
    UpdateProfileCommand,
)

__all__ = [
    "DeleteAccountCommand",
    "UpdateProfileCommand",
]
