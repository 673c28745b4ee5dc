"""Session service for issuing, listing and revoking login sessions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from warden.domain.session import (
    Device,
    SessionIssueError,
    SessionNotFoundError,
    UserSession,
)
from warden.domain.shared.time import utc_now

if TYPE_CHECKING:
    from warden.application.context import AuthContext
    from warden.domain.session import SessionRepository
    from warden_auth import JWTService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionView:
    """A session as presented to its owner."""

    id: UUID
    ip: str
    device: Device
    expiry_date: datetime
    created_at: datetime
    current: bool = False

    @classmethod
    def from_session(cls, session: UserSession, current: bool = False) -> SessionView:
        return cls(
            id=session.id,
            ip=session.ip,
            device=session.device,
            expiry_date=session.expiry_date,
            created_at=session.created_at,
            current=current,
        )


class SessionService:
    """
    Application service for the server-side session lifecycle.

    Every issued token is backed by exactly one session row. The token's
    ``exp`` claim and the row's ``expiry_date`` are the same instant, so
    the token stops working at the same moment regardless of which check
    catches it first.
    """

    def __init__(
        self,
        session_repository: SessionRepository,
        jwt_service: JWTService,
        session_lifetime: timedelta,
    ):
        self._session_repo = session_repository
        self._jwt_service = jwt_service
        self._lifetime = session_lifetime

    async def issue(self, user_id: UUID, ip: str, device: Device) -> str:
        """Sign a token for the user and persist its session.

        Parameters
        ----------
        user_id
            The owner of the new session
        ip
            Origin IP address of the login request
        device
            Device detected from the User-Agent header

        Returns
        -------
        The signed token

        Raises
        ------
        SessionIssueError
            If the session row cannot be stored
        """
        # JWT exp has second precision
        expires_at = (utc_now() + self._lifetime).replace(microsecond=0)
        token = self._jwt_service.create_token(user_id, expires_at=expires_at)
        session = UserSession.issue(
            user_id=user_id,
            token=token,
            ip=ip,
            device=device,
            expiry_date=expires_at,
        )

        try:
            await self._session_repo.save(session)
        except Exception as e:
            logger.exception("Failed to store session for user %s", user_id)
            raise SessionIssueError(user_id, reason=type(e).__name__) from e

        logger.info(
            "Session %s issued for user %s from %s (%s)",
            session.id,
            user_id,
            ip,
            device,
        )
        return token

    async def get_active(self, user_id: UUID, token: str) -> Optional[UserSession]:
        return await self._session_repo.find_active(user_id, token)

    async def list(self, auth: AuthContext) -> list[SessionView]:
        """List the caller's sessions, the current one first."""
        views: list[SessionView] = []

        current = await self._session_repo.find_active(auth.user_id, auth.token)
        if current is not None:
            views.append(SessionView.from_session(current, current=True))

        others = await self._session_repo.list_for_user(
            auth.user_id,
            exclude_token=auth.token,
        )
        views.extend(SessionView.from_session(s) for s in others)
        return views

    async def revoke(self, user_id: UUID, token: str) -> bool:
        revoked = await self._session_repo.delete_by_token(user_id, token)
        if revoked:
            logger.info("Session revoked for user %s", user_id)
        return revoked

    async def revoke_by_id(self, user_id: UUID, session_id: UUID) -> None:
        """Revoke one of the user's own sessions.

        Raises
        ------
        SessionNotFoundError
            If the session doesn't exist or belongs to someone else
        """
        if not await self._session_repo.delete_by_id(user_id, session_id):
            raise SessionNotFoundError(session_id)
        logger.info("Session %s revoked by user %s", session_id, user_id)

    async def terminate_others(self, user_id: UUID, token: str) -> int:
        count = await self._session_repo.delete_others(user_id, keep_token=token)
        logger.info("Terminated %d other session(s) for user %s", count, user_id)
        return count

    async def purge_expired(self) -> int:
        count = await self._session_repo.delete_expired()
        logger.info("Purged %d expired session(s)", count)
        return count
