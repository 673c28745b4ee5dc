from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

from warden.domain.user import User, UserRole, UserStatus
from warden.presentation.api.schemas.common import MessageResponse


def _upper(value: Any) -> Any:
    return value.upper() if isinstance(value, str) else value


class UpdateRoleRequest(BaseModel):
    """Request schema for updating a user's role."""

    role: UserRole

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, value: Any) -> Any:
        return _upper(value)


class UpdateStatusRequest(BaseModel):
    """Request schema for updating a user's status."""

    status: UserStatus

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, value: Any) -> Any:
        return _upper(value)


class AdminUserResponse(BaseModel):
    """Response schema for a user as seen by administrators."""

    id: UUID
    name: Optional[str] = None
    username: str
    email: str
    role: str
    status: str
    registered_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_user(cls, user: User) -> "AdminUserResponse":
        return cls(
            id=user.id,
            name=user.name,
            username=user.username,
            email=user.email,
            role=user.role.value,
            status=user.status.value,
            registered_at=user.created_at,
            updated_at=user.updated_at,
        )


class DeleteUserResponse(MessageResponse):
    soft_deleted: bool
