"""Authentication services.

Provides password hashing and JWT token management.
"""

from warden_auth.services.jwt_service import JWTService
from warden_auth.services.password_service import (
    PASSWORD_PATTERN,
    PasswordHashingService,
    is_strong_password,
)

__all__ = [
    "PASSWORD_PATTERN",
    "JWTService",
    "PasswordHashingService",
    "is_strong_password",
]
