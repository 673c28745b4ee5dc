"""Authentication schemas for request/response models."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    field_validator,
)

from warden.domain.user import Email, InvalidEmailError, User
from warden.domain.user.value_objects import USERNAME_PATTERN

NAME_INPUT_MAX_LENGTH = 30


def validate_email(value: str) -> str:
    """Apply the account email rule on top of the generic address check."""
    try:
        return Email(value).value
    except InvalidEmailError as e:
        raise ValueError(e.message) from e


def validate_username(value: str) -> str:
    value = value.strip()
    if not USERNAME_PATTERN.match(value):
        msg = (
            "Username must be 4-31 letters, digits, underscores or dots "
            "and cannot start or end with a dot or contain '..'"
        )
        raise ValueError(msg)
    return value


class RegisterRequest(BaseModel):
    """Request schema for user registration.

    Password strength is checked by the service so that a weak password
    yields the same 400 response on every endpoint that accepts one.
    """

    email: EmailStr = Field(..., description="User's email address")
    username: str = Field(..., description="Unique username (4-31 characters)")
    password: str = Field(
        ...,
        min_length=1,
        description=(
            "8-20 characters with lower and upper case letters "
            "and one of @$!%*?&"
        ),
    )
    name: Optional[str] = Field(
        default=None,
        max_length=NAME_INPUT_MAX_LENGTH,
        description="Display name",
    )

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        return validate_email(value)

    @field_validator("username")
    @classmethod
    def check_username(cls, value: str) -> str:
        return validate_username(value)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "user@example.com",
                "username": "new_user123",
                "password": "Secure@Pass1",
                "name": "Ada Lovelace",
            },
        },
    )


class LoginRequest(BaseModel):
    """Request schema for user login.

    ``identifier`` may be an email address or a username. The field is
    also accepted under the name ``email``.
    """

    identifier: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("identifier", "email"),
    )
    password: str = Field(..., min_length=1)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "identifier": "user@example.com",
                "password": "Secure@Pass1",
            },
        },
    )


class ChangePasswordRequest(BaseModel):
    """Request schema for changing a user's password."""

    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """Response schema for a freshly issued session token.

    The same token is also set as an HttpOnly ``access_token`` cookie.
    """

    token: str
    token_type: str = Field(default="bearer")
    expires_at: datetime

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                "token_type": "bearer",
                "expires_at": "2025-01-04T10:30:00Z",
            },
        },
    )


class ProfileResponse(BaseModel):
    """Response schema for the caller's own profile."""

    id: UUID
    email: str
    username: str
    name: Optional[str] = None
    role: str
    status: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_user(cls, user: User) -> "ProfileResponse":
        return cls(
            id=user.id,
            email=user.email,
            username=user.username,
            name=user.name,
            role=user.role.value,
            status=user.status.value,
            created_at=user.created_at,
        )
