"""Authentication exceptions.

These exceptions are raised by the warden_auth package and the
authentication service. The presentation layer translates them into
HTTP responses.
"""


class AuthError(Exception):
    """Base exception for all authentication errors."""

    def __init__(self, message: str = "Authentication error"):
        self.message = message
        super().__init__(self.message)


class InvalidTokenError(AuthError):
    """Raised when a JWT token is invalid, expired, or malformed."""

    def __init__(self, message: str = "invalid token"):
        super().__init__(message)


class SessionExpiredError(AuthError):
    """Raised when a token has no matching active session."""

    def __init__(self, message: str = "session expired"):
        super().__init__(message)


class WeakPasswordError(AuthError):
    """Raised when a password doesn't meet strength requirements."""

    def __init__(self, message: str = "Password does not meet requirements"):
        super().__init__(message)


class InvalidCredentialsError(AuthError):
    """Raised when the identifier or password is incorrect during login."""

    def __init__(self, message: str = "invalid credentials"):
        super().__init__(message)


class InvalidCurrentPasswordError(AuthError):
    """Raised when the current password does not match on password change."""

    def __init__(self, message: str = "invalid current password"):
        super().__init__(message)


class PasswordUnchangedError(AuthError):
    """Raised when the new password equals the current one."""

    def __init__(self, message: str = "new password must be different"):
        super().__init__(message)
