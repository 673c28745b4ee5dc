"""Authentication context for request-scoped identity."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING
from uuid import UUID

from warden.domain.user import UserRole

if TYPE_CHECKING:
    from warden.domain.session import UserSession
    from warden.domain.user import User


@dataclass(frozen=True)
class AuthContext:
    """Immutable context for the current authenticated request.

    Carries the token together with the session it belongs to, so that
    logout and session listing can tell the current session apart.
    """

    user_id: UUID
    email: str
    username: str
    role: UserRole
    session_id: UUID
    token: str

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @classmethod
    def create(cls, user: User, session: UserSession) -> AuthContext:
        return cls(
            user_id=user.id,
            email=user.email,
            username=user.username,
            role=user.role,
            session_id=session.id,
            token=session.token,
        )

    def __str__(self) -> str:
        return f"AuthContext({self.username})"

    def __repr__(self) -> str:
        # token is a bearer credential and never printed
        return (
            f"AuthContext(user_id={self.user_id}, "
            f"username={self.username!r}, role={self.role.value}, "
            f"session_id={self.session_id})"
        )
