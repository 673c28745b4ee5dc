"""Password hashing service using bcrypt.

Provides secure password hashing and verification with strength
validation.
"""

import re

import bcrypt

from warden_auth.exceptions import WeakPasswordError

# 8-20 chars; at least one lower case, one upper case and one special
PASSWORD_PATTERN = re.compile(
    r"^(?=.*[a-z])(?=.*[A-Z])(?=.*[@$!%*?&])[a-zA-Z\d@$!%*?&]{8,20}$",
)


def is_strong_password(password: str) -> bool:
    """Return True if the password satisfies the complexity policy."""
    return bool(password) and PASSWORD_PATTERN.match(password) is not None


class PasswordHashingService:
    """Service for secure password hashing and verification.

    Uses bcrypt for password hashing with configurable work factor.

    Examples
    --------
    >>> service = PasswordHashingService(rounds=4)
    >>> hashed = service.hash("Secure@Pass1")
    >>> service.verify("Secure@Pass1", hashed)
    True
    >>> service.verify("Wrong@Pass1", hashed)
    False
    """

    MIN_LENGTH = 8
    MAX_LENGTH = 20

    def __init__(self, rounds: int = 12):
        """Initialize the password hashing service.

        Parameters
        ----------
        rounds
            The bcrypt work factor (log2 of iterations). Default is 12.
        """
        self._rounds = rounds

    def hash(self, password: str) -> str:
        """Hash a plaintext password.

        Raises
        ------
        WeakPasswordError
            If password doesn't meet requirements
        """
        self.validate_strength(password)
        salt = bcrypt.gensalt(rounds=self._rounds)
        hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
        return hashed.decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against a hash.

        Returns
        -------
        True if password matches, False otherwise
        """
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"),
                password_hash.encode("utf-8"),
            )
        except (ValueError, TypeError):
            # Invalid hash format
            return False

    def validate_strength(self, password: str) -> None:
        """Validate that a password meets strength requirements.

        Current requirements:
        - Between 8 and 20 characters
        - At least one lower case and one upper case letter
        - At least one special character out of ``@$!%*?&``
        - Only letters, digits and the special characters above

        Raises
        ------
        WeakPasswordError
            If password doesn't meet requirements
        """
        if not password:
            msg = "Password cannot be empty"
            raise WeakPasswordError(msg)

        if len(password) < self.MIN_LENGTH:
            msg = f"Password must be at least {self.MIN_LENGTH} characters"
            raise WeakPasswordError(msg)

        if len(password) > self.MAX_LENGTH:
            msg = f"Password cannot exceed {self.MAX_LENGTH} characters"
            raise WeakPasswordError(msg)

        if not is_strong_password(password):
            msg = (
                "Password must contain lower and upper case letters "
                "and one of @$!%*?&"
            )
            raise WeakPasswordError(msg)

    def needs_rehash(self, password_hash: str) -> bool:
        """Check if a password hash needs to be rehashed.

        After changing the rounds setting, existing hashes can be
        identified for rehashing on next login.
        """
        try:
            # bcrypt format: $2b$XX$...
            parts = password_hash.split("$")
            if len(parts) >= 3:
                current_rounds = int(parts[2])
                return current_rounds != self._rounds
        except (ValueError, IndexError):
            pass
        return True
