from uuid import UUID

from warden.domain.user import User, UserNotFoundError, UserRepository, UserStatus


class UpdateUserStatusCommand:
    """Command to activate, deactivate or suspend a user."""

    def __init__(self, user_repository: UserRepository):
        self._user_repo = user_repository

    async def execute(self, user_id: UUID, status: UserStatus) -> User:
        user = await self._user_repo.find_by_id(user_id)
        if not user:
            raise UserNotFoundError(user_id)

        user.change_status(status)
        await self._user_repo.save(user)
        return user
