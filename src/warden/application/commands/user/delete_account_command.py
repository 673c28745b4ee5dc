import logging
from uuid import UUID

from warden.domain.session import SessionRepository
from warden.domain.user import UserNotFoundError, UserRepository

logger = logging.getLogger(__name__)


class DeleteAccountCommand:
    """Command for a user to delete their own account.

    The account is soft-deleted and every session is revoked, which signs
    the user out everywhere.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        session_repository: SessionRepository,
    ):
        self._user_repo = user_repository
        self._session_repo = session_repository

    async def execute(self, user_id: UUID) -> None:
        if not await self._user_repo.soft_delete(user_id):
            raise UserNotFoundError(user_id)

        revoked = await self._session_repo.delete_all_for_user(user_id)
        logger.info("Account %s deleted, %d session(s) revoked", user_id, revoked)
