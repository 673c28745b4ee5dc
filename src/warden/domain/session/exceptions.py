"""Session domain exceptions."""

from uuid import UUID

from warden.domain.shared.exceptions import (
    DomainException,
    EntityNotFoundError,
    ErrorCode,
)


class SessionNotFoundError(EntityNotFoundError):
    """Raised when a session does not exist or belongs to another user."""

    def __init__(self, session_id: str | UUID) -> None:
        self.session_id = str(session_id)
        super().__init__(
            message=f"Session '{self.session_id}' not found",
            code=ErrorCode.SESSION_NOT_FOUND,
            details={"session_id": self.session_id},
        )


class SessionIssueError(DomainException):
    """Raised when a freshly signed session cannot be persisted."""

    def __init__(self, user_id: str | UUID, reason: str | None = None) -> None:
        super().__init__(
            message="Failed to create a session",
            code=ErrorCode.SESSION_ISSUE_FAILED,
            details={"user_id": str(user_id), "reason": reason},
        )
