"""Pydantic schemas for API request/response models."""

from warden.presentation.api.schemas.admin import (
    AdminUserResponse,
    DeleteUserResponse,
    UpdateRoleRequest,
    UpdateStatusRequest,
)
from warden.presentation.api.schemas.auth import (
    ChangePasswordRequest,
    LoginRequest,
    ProfileResponse,
    RegisterRequest,
    TokenResponse,
)
from warden.presentation.api.schemas.common import (
    ErrorResponse,
    HealthResponse,
    MessageResponse,
)
from warden.presentation.api.schemas.sessions import DeviceResponse, SessionResponse
from warden.presentation.api.schemas.users import UpdateProfileRequest

__all__ = [
    "AdminUserResponse",
    "ChangePasswordRequest",
    "DeleteUserResponse",
    "DeviceResponse",
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "ProfileResponse",
    "RegisterRequest",
    "SessionResponse",
    "TokenResponse",
    "UpdateProfileRequest",
    "UpdateRoleRequest",
    "UpdateStatusRequest",
]
