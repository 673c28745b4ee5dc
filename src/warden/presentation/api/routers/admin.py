import logging
from uuid import UUID

from fastapi import APIRouter, Query

from warden.application.commands import (
    DeleteUserCommand,
    UpdateUserRoleCommand,
    UpdateUserStatusCommand,
)
from warden.application.queries import GetUserQuery, ListUsersQuery
from warden.domain.shared.exceptions import DomainException
from warden.infrastructure.persistence.sqlalchemy.repositories import (
    SessionRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)
from warden.presentation.api.dependencies import AdminAuth, DBSession
from warden.presentation.api.schemas.admin import (
    AdminUserResponse,
    DeleteUserResponse,
    UpdateRoleRequest,
    UpdateStatusRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/users",
    summary="List all users",
    responses={
        200: {"description": "List of all users"},
        403: {"description": "Admin access required"},
    },
)
async def list_users(
    _admin: AdminAuth,  # Used for authorization check
    session: DBSession,
) -> list[AdminUserResponse]:
    """List all users that are not deleted."""
    users = await ListUsersQuery(UserRepositorySQLAlchemy(session)).execute()
    return [AdminUserResponse.from_user(u) for u in users]


@router.get(
    "/users/{user_id}",
    summary="Get a user",
    responses={
        200: {"description": "User data"},
        403: {"description": "Admin access required"},
        404: {"description": "User not found"},
    },
)
async def get_user(
    user_id: UUID,
    _admin: AdminAuth,
    session: DBSession,
) -> AdminUserResponse:
    user = await GetUserQuery(UserRepositorySQLAlchemy(session)).execute(user_id)
    return AdminUserResponse.from_user(user)


@router.delete(
    "/users/{user_id}",
    summary="Delete a user",
    responses={
        200: {"description": "User deleted"},
        400: {"description": "Cannot delete yourself"},
        403: {"description": "Admin access required"},
        404: {"description": "User not found"},
        409: {"description": "User still referenced by other data"},
    },
)
async def delete_user(
    user_id: UUID,
    admin: AdminAuth,
    session: DBSession,
    soft: bool = Query(default=False, description="Soft delete instead of removal"),
) -> DeleteUserResponse:
    """Delete a user. With ``soft=true`` the row is kept but hidden."""
    command = DeleteUserCommand(
        user_repository=UserRepositorySQLAlchemy(session),
        session_repository=SessionRepositorySQLAlchemy(session),
    )

    try:
        soft_deleted = await command.execute(
            user_id=user_id,
            requesting_admin_id=admin.user_id,
            soft=soft,
        )
        await session.commit()
    except DomainException:
        await session.rollback()
        raise

    logger.info("Admin %s deleted user: %s", admin.username, user_id)
    return DeleteUserResponse(
        message=f"User with ID {user_id} deleted successfully",
        soft_deleted=soft_deleted,
    )


@router.patch(
    "/users/{user_id}/role",
    summary="Update user role",
    responses={
        200: {"description": "Role updated successfully"},
        400: {"description": "Cannot demote yourself"},
        403: {"description": "Admin access required"},
        404: {"description": "User not found"},
        422: {"description": "Invalid role"},
    },
)
async def update_user_role(
    user_id: UUID,
    request: UpdateRoleRequest,
    admin: AdminAuth,
    session: DBSession,
) -> AdminUserResponse:
    """Promote a user to ADMIN or demote them to USER."""
    command = UpdateUserRoleCommand(user_repository=UserRepositorySQLAlchemy(session))

    try:
        user = await command.execute(
            user_id=user_id,
            new_role=request.role,
            requesting_admin_id=admin.user_id,
        )
        await session.commit()
    except DomainException:
        await session.rollback()
        raise

    logger.info(
        "Admin %s changed role of %s to %s",
        admin.username,
        user_id,
        request.role.value,
    )
    return AdminUserResponse.from_user(user)


@router.patch(
    "/users/{user_id}/status",
    summary="Update user status",
    responses={
        200: {"description": "Status updated successfully"},
        403: {"description": "Admin access required"},
        404: {"description": "User not found"},
        422: {"description": "Invalid status"},
    },
)
async def update_user_status(
    user_id: UUID,
    request: UpdateStatusRequest,
    admin: AdminAuth,
    session: DBSession,
) -> AdminUserResponse:
    """Set a user's status to ACTIVATE, DEACTIVATE or SUSPEND."""
    command = UpdateUserStatusCommand(UserRepositorySQLAlchemy(session))

    try:
        user = await command.execute(user_id=user_id, status=request.status)
        await session.commit()
    except DomainException:
        await session.rollback()
        raise

    logger.info(
        "Admin %s changed status of %s to %s",
        admin.username,
        user_id,
        request.status.value,
    )
    return AdminUserResponse.from_user(user)
