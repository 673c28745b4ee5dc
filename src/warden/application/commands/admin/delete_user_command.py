import logging
from uuid import UUID

from warden.domain.session import SessionRepository
from warden.domain.user import CannotDeleteSelfError, UserNotFoundError, UserRepository

logger = logging.getLogger(__name__)


class DeleteUserCommand:
    """Command to delete a user, either softly or for good."""

    def __init__(
        self,
        user_repository: UserRepository,
        session_repository: SessionRepository,
    ):
        self._user_repo = user_repository
        self._session_repo = session_repository

    async def execute(
        self,
        user_id: UUID,
        requesting_admin_id: UUID,
        soft: bool = False,
    ) -> bool:
        """Delete the user and return whether it was a soft delete.

        Raises
        ------
        CannotDeleteSelfError
            If an admin targets their own account
        UserNotFoundError
            If no live user has this id
        UserDeletionConflictError
            If a hard delete is blocked by referencing rows
        """
        if user_id == requesting_admin_id:
            raise CannotDeleteSelfError

        user = await self._user_repo.find_by_id(user_id)
        if not user:
            raise UserNotFoundError(user_id)

        await self._session_repo.delete_all_for_user(user_id)

        if soft:
            await self._user_repo.soft_delete(user_id)
        else:
            await self._user_repo.hard_delete(user_id)

        logger.info(
            "User %s %s by admin %s",
            user_id,
            "soft-deleted" if soft else "deleted",
            requesting_admin_id,
        )
        return soft
