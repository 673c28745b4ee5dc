"""Common schemas shared across API endpoints."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field


def _utc_now() -> datetime:
    """Return current UTC time (timezone-aware)."""
    return datetime.now(UTC)


class ErrorResponse(BaseModel):
    """Standard error response schema."""

    detail: str = Field(..., description="Error message")
    code: str | None = Field(None, description="Error code for programmatic handling")
    path: str | None = Field(None, description="Request path that failed")
    timestamp: datetime = Field(
        default_factory=_utc_now,
        description="When the error occurred",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "detail": "User 'c0ffee00-0000-4000-8000-000000000000' not found",
                "code": "USER_NOT_FOUND",
                "path": "/api/v1/admin/users/c0ffee00-0000-4000-8000-000000000000",
            },
        },
    )


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="API version")
    api_versions: list[str] = Field(default_factory=lambda: ["v1"])


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str
