"""Router for the caller's own account."""

import logging

from fastapi import APIRouter, Response, status

from warden.application.commands import DeleteAccountCommand, UpdateProfileCommand
from warden.domain.shared.exceptions import DomainException
from warden.domain.user import UserNotFoundError
from warden.infrastructure.persistence.sqlalchemy.repositories import (
    SessionRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)
from warden.presentation.api.dependencies import (
    ACCESS_TOKEN_COOKIE,
    CurrentAuth,
    DBSession,
    SettingsDep,
)
from warden.presentation.api.schemas.auth import ProfileResponse
from warden.presentation.api.schemas.users import UpdateProfileRequest

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/me",
    summary="Get current user",
    responses={
        200: {"description": "Current user data"},
        401: {"description": "Not authenticated"},
    },
)
async def get_me(auth: CurrentAuth, session: DBSession) -> ProfileResponse:
    user = await UserRepositorySQLAlchemy(session).find_by_id(auth.user_id)
    if user is None:
        raise UserNotFoundError(auth.user_id)
    return ProfileResponse.from_user(user)


@router.put(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Update profile",
    responses={
        204: {"description": "Profile updated"},
        401: {"description": "Not authenticated"},
        422: {"description": "Email or username already taken, or invalid input"},
    },
)
async def update_profile(
    request: UpdateProfileRequest,
    auth: CurrentAuth,
    session: DBSession,
) -> None:
    """
    Update email, username or display name.

    Only the fields present in the body are changed. Passwords are changed
    through ``/auth/change-password``.
    """
    command = UpdateProfileCommand(UserRepositorySQLAlchemy(session))

    try:
        await command.execute(
            user_id=auth.user_id,
            email=request.email,
            username=request.username,
            name=request.name,
        )
        await session.commit()
    except DomainException:
        await session.rollback()
        raise

    logger.info("Profile updated for user %s", auth.user_id)


@router.delete(
    "/delete-account",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete own account",
    responses={
        204: {"description": "Account deleted and all sessions revoked"},
        401: {"description": "Not authenticated"},
    },
)
async def delete_account(
    response: Response,
    auth: CurrentAuth,
    session: DBSession,
    settings: SettingsDep,
) -> None:
    """Soft-delete the caller's account and sign them out everywhere."""
    command = DeleteAccountCommand(
        user_repository=UserRepositorySQLAlchemy(session),
        session_repository=SessionRepositorySQLAlchemy(session),
    )

    try:
        await command.execute(auth.user_id)
        await session.commit()
    except DomainException:
        await session.rollback()
        raise

    response.delete_cookie(
        key=ACCESS_TOKEN_COOKIE,
        path="/",
        domain=settings.api_cookie_domain,
    )
