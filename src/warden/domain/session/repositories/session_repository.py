"""Session repository interface."""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from warden.domain.session.entities import UserSession


class SessionRepository(ABC):
    """Repository interface for UserSession entities.

    Expiry is evaluated against the current time inside the query, so an
    expired row is never returned as active even before it is purged.
    """

    @abstractmethod
    async def save(self, session: UserSession) -> None:
        """Persist a new session."""

    @abstractmethod
    async def find_active(self, user_id: UUID, token: str) -> Optional[UserSession]:
        """Find the unexpired session of a user holding exactly this token."""

    @abstractmethod
    async def list_for_user(
        self,
        user_id: UUID,
        exclude_token: Optional[str] = None,
    ) -> list[UserSession]:
        """List unexpired sessions of a user, newest first."""

    @abstractmethod
    async def delete_by_token(self, user_id: UUID, token: str) -> bool:
        """Delete one session by token. Returns True if a row was removed."""

    @abstractmethod
    async def delete_by_id(self, user_id: UUID, session_id: UUID) -> bool:
        """Delete one session of a user by id."""

    @abstractmethod
    async def delete_others(self, user_id: UUID, keep_token: str) -> int:
        """Delete every session of a user except the one holding keep_token."""

    @abstractmethod
    async def delete_all_for_user(self, user_id: UUID) -> int:
        """Delete every session of a user."""

    @abstractmethod
    async def delete_expired(self) -> int:
        """Delete all expired sessions across users."""
