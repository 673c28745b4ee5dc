"""Warden Auth - Generic authentication infrastructure.

This package provides authentication infrastructure that is independent
of the user and session domain. It handles:
- Password hashing (bcrypt) and the password complexity policy
- JWT token creation and verification

Architecture:
    warden_auth/
    ├── services/           # Pure logic (password hashing, JWT)
    ├── schemas.py          # Data classes
    └── exceptions.py       # Auth exceptions
"""

from warden_auth.exceptions import (
    AuthError,
    InvalidCredentialsError,
    InvalidCurrentPasswordError,
    InvalidTokenError,
    PasswordUnchangedError,
    SessionExpiredError,
    WeakPasswordError,
)
from warden_auth.schemas import TokenPayload
from warden_auth.services import JWTService, PasswordHashingService

__all__ = [
    # Services
    "PasswordHashingService",
    "JWTService",
    # Schemas
    "TokenPayload",
    # Exceptions
    "AuthError",
    "InvalidCredentialsError",
    "InvalidCurrentPasswordError",
    "InvalidTokenError",
    "PasswordUnchangedError",
    "SessionExpiredError",
    "WeakPasswordError",
]
