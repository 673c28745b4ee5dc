"""User domain exceptions.

Custom exceptions for the user domain, used for validation
and business rule violations.
"""

from uuid import UUID

from warden.domain.shared.exceptions import (
    BusinessRuleViolation,
    ConflictError,
    EntityNotFoundError,
    ErrorCode,
    ValidationError,
)


class InvalidEmailError(ValidationError):
    """Raised when email format is invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code=ErrorCode.INVALID_FORMAT)


class InvalidUsernameError(ValidationError):
    """Raised when a username violates the naming rules."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code=ErrorCode.INVALID_FORMAT)


class UserAlreadyExistsError(BusinessRuleViolation):
    """Raised when email or username is already taken."""

    def __init__(self, field: str, value: str) -> None:
        self.field = field
        self.value = value
        super().__init__(
            message=f"User with {field} '{value}' already exists",
            code=ErrorCode.USER_ALREADY_EXISTS,
            details={"field": field, "value": value},
        )


class UserNotFoundError(EntityNotFoundError):
    """User not found."""

    def __init__(self, user_id: str | UUID | None = None) -> None:
        self.user_id = str(user_id) if user_id else None
        message = (
            f"User '{self.user_id}' not found" if self.user_id else "User not found"
        )
        super().__init__(
            message=message,
            code=ErrorCode.USER_NOT_FOUND,
            details={"user_id": self.user_id},
        )


class UserDeletionConflictError(ConflictError):
    """Raised when a user row is still referenced and cannot be removed."""

    def __init__(self, user_id: str | UUID) -> None:
        self.user_id = str(user_id)
        super().__init__(
            message=(
                f"User '{self.user_id}' cannot be deleted "
                "because related records still reference it"
            ),
            code=ErrorCode.USER_DELETION_CONFLICT,
            details={"user_id": self.user_id},
        )


class CannotDeleteSelfError(ValidationError):
    """Cannot delete your own account."""

    def __init__(self) -> None:
        super().__init__(
            "Cannot delete your own account",
            code=ErrorCode.CANNOT_DELETE_SELF,
        )


class CannotDemoteSelfError(ValidationError):
    """Cannot demote yourself from admin."""

    def __init__(self) -> None:
        super().__init__(
            "Cannot demote yourself from admin",
            code=ErrorCode.CANNOT_DEMOTE_SELF,
        )
