from enum import Enum
from typing import Union

from warden.domain.shared.exceptions import ErrorCode, ValidationError


class UserStatus(str, Enum):
    """Account status. New accounts start deactivated."""

    ACTIVATE = "ACTIVATE"
    DEACTIVATE = "DEACTIVATE"
    SUSPEND = "SUSPEND"

    @classmethod
    def parse(cls, value: Union[str, "UserStatus"]) -> "UserStatus":
        """Resolve a status name regardless of case."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value.strip().upper())
        except ValueError as e:
            msg = f"Invalid user status: {value}"
            raise ValidationError(msg, code=ErrorCode.INVALID_FORMAT) from e
