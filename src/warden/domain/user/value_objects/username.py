"""Username value object."""

import re
from dataclasses import dataclass

from warden.domain.user.exceptions import InvalidUsernameError

# 4-31 word characters or dots; no leading dot, no trailing dot, no ".."
USERNAME_PATTERN = re.compile(r"^(?!.*\.\.)(?!.*\.$)[^\W][\w.]{3,30}$", re.ASCII)


@dataclass(frozen=True)
class Username:
    """Value object representing a validated username.

    Usernames are case sensitive and stored exactly as entered, minus
    surrounding whitespace.
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            msg = "Username cannot be empty"
            raise InvalidUsernameError(msg)

        stripped = self.value.strip()

        if not USERNAME_PATTERN.match(stripped):
            msg = (
                f"Invalid username: {self.value}. Use 4-31 letters, digits, "
                "underscores or dots, without leading, trailing or double dots"
            )
            raise InvalidUsernameError(msg)

        object.__setattr__(self, "value", stripped)

    def __str__(self) -> str:
        return self.value
