"""Schemas for the caller's own account."""

from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from warden.presentation.api.schemas.auth import (
    NAME_INPUT_MAX_LENGTH,
    validate_email,
    validate_username,
)


class UpdateProfileRequest(BaseModel):
    """Partial profile update. Omitted fields stay unchanged."""

    email: Optional[EmailStr] = None
    username: Optional[str] = None
    name: Optional[str] = Field(default=None, max_length=NAME_INPUT_MAX_LENGTH)

    @field_validator("email")
    @classmethod
    def check_email(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return validate_email(value)

    @field_validator("username")
    @classmethod
    def check_username(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return validate_username(value)
