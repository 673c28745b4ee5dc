"""Router for listing and revoking the caller's login sessions."""

import logging
from uuid import UUID

from fastapi import APIRouter, status

from warden.domain.shared.exceptions import DomainException
from warden.presentation.api.dependencies import CurrentAuth, DBSession, Sessions
from warden.presentation.api.schemas.sessions import SessionResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    summary="List sessions",
    responses={
        200: {"description": "Active sessions, current session first"},
        401: {"description": "Not authenticated"},
    },
)
async def list_sessions(
    auth: CurrentAuth,
    sessions: Sessions,
) -> list[SessionResponse]:
    """List the caller's unexpired sessions with the current one on top."""
    views = await sessions.list(auth)
    return [SessionResponse.from_view(view) for view in views]


@router.delete(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Terminate other sessions",
    responses={
        204: {"description": "All sessions except the current one revoked"},
        401: {"description": "Not authenticated"},
    },
)
async def terminate_other_sessions(
    auth: CurrentAuth,
    sessions: Sessions,
    session: DBSession,
) -> None:
    await sessions.terminate_others(auth.user_id, auth.token)
    await session.commit()


@router.delete(
    "/{session_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Revoke a session",
    responses={
        204: {"description": "Session revoked"},
        401: {"description": "Not authenticated"},
        404: {"description": "Session not found"},
    },
)
async def revoke_session(
    session_id: UUID,
    auth: CurrentAuth,
    sessions: Sessions,
    session: DBSession,
) -> None:
    """Revoke one of the caller's sessions, including the current one."""
    try:
        await sessions.revoke_by_id(auth.user_id, session_id)
        await session.commit()
    except DomainException:
        await session.rollback()
        raise
