"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from warden.domain.user.aggregates.user import User


class UserRepository(ABC):
    """Repository interface for User aggregates.

    Lookups only see live users. Soft-deleted rows still count for the
    ``exists_*`` checks because their email and username stay reserved.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UUID) -> Optional[User]:
        """Find a live user by their ID."""

    @abstractmethod
    async def find_by_identifier(self, identifier: str) -> Optional[User]:
        """Find a live user by email address or username."""

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool:
        """Check if any user row holds the given email."""

    @abstractmethod
    async def exists_by_username(self, username: str) -> bool:
        """Check if any user row holds the given username."""

    @abstractmethod
    async def save(self, user: User) -> None:
        """Save or update a user.

        Raises
        ------
        UserAlreadyExistsError
            If the email or username collides with another row
        """

    @abstractmethod
    async def list_all(self) -> list[User]:
        """List all live users ordered by creation time."""

    @abstractmethod
    async def soft_delete(self, user_id: UUID) -> bool:
        """Mark a user as deleted. Returns False if no live user matched."""

    @abstractmethod
    async def hard_delete(self, user_id: UUID) -> bool:
        """Remove a user row. Returns False if no live user matched.

        Raises
        ------
        UserDeletionConflictError
            If other rows still reference the user
        """

    @abstractmethod
    async def count(self) -> int:
        """Count live users."""
