"""Shared domain building blocks."""

from warden.domain.shared.exceptions import (
    BusinessRuleViolation,
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    ValidationError,
)
from warden.domain.shared.time import ensure_tz_aware, utc_now

__all__ = [
    "BusinessRuleViolation",
    "ConflictError",
    "DomainException",
    "EntityNotFoundError",
    "ErrorCode",
    "ValidationError",
    "ensure_tz_aware",
    "utc_now",
]
