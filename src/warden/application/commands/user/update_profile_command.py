from typing import Optional
from uuid import UUID

from warden.domain.user import (
    Email,
    User,
    UserAlreadyExistsError,
    Username,
    UserNotFoundError,
    UserRepository,
)


class UpdateProfileCommand:
    """Command to update the caller's email, username or display name."""

    def __init__(self, user_repository: UserRepository):
        self._user_repo = user_repository

    async def execute(
        self,
        user_id: UUID,
        email: Optional[str] = None,
        username: Optional[str] = None,
        name: Optional[str] = None,
    ) -> User:
        user = await self._user_repo.find_by_id(user_id)
        if not user:
            raise UserNotFoundError(user_id)

        new_email = Email(email) if email is not None else None
        new_username = Username(username) if username is not None else None

        if (
            new_email is not None
            and new_email.value != user.email
            and await self._user_repo.exists_by_email(new_email.value)
        ):
            raise UserAlreadyExistsError("email", new_email.value)

        if (
            new_username is not None
            and new_username.value != user.username
            and await self._user_repo.exists_by_username(new_username.value)
        ):
            raise UserAlreadyExistsError("username", new_username.value)

        user.update_profile(email=new_email, username=new_username, name=name)
        await self._user_repo.save(user)
        return user
