"""Authentication service for registration, login and token validation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Union

from warden.application.context import AuthContext
from warden.domain.user import (
    Email,
    User,
    UserAlreadyExistsError,
    Username,
    UserStatus,
)
from warden_auth import (
    InvalidCredentialsError,
    InvalidCurrentPasswordError,
    InvalidTokenError,
    PasswordUnchangedError,
    SessionExpiredError,
    TokenPayload,
    WeakPasswordError,
)

if TYPE_CHECKING:
    from warden.application.services.session_service import SessionService
    from warden.domain.session import Device
    from warden.domain.user import UserRepository
    from warden_auth import JWTService, PasswordHashingService

logger = logging.getLogger(__name__)


class AuthenticationService:
    """
    Application service for user authentication.

    Orchestrates warden_auth infrastructure (password hashing, JWT tokens)
    with the User and session domains to provide:
    - User registration
    - Login with email or username
    - Token validation against the session store
    - Password change
    - Logout

    Passwords only ever reach this service in plaintext; what leaves it is
    a bcrypt hash on the User aggregate.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        session_service: SessionService,
        password_service: PasswordHashingService,
        jwt_service: JWTService,
    ):
        self._user_repo = user_repository
        self._sessions = session_service
        self._password_service = password_service
        self._jwt_service = jwt_service

    async def register(  # NOQA: PLR0913
        self,
        email: str,
        username: str,
        password: str,
        name: Optional[str] = None,
        status: Optional[Union[str, UserStatus]] = None,
    ) -> User:
        """Create a new account.

        Raises
        ------
        WeakPasswordError
            If the password fails the complexity policy
        UserAlreadyExistsError
            If the email or username is taken (email is checked first)
        """
        self._password_service.validate_strength(password)

        email_obj = Email(email)
        username_obj = Username(username)
        user_status = UserStatus.parse(status) if status else UserStatus.DEACTIVATE

        if await self._user_repo.exists_by_email(email_obj.value):
            raise UserAlreadyExistsError("email", email_obj.value)
        if await self._user_repo.exists_by_username(username_obj.value):
            raise UserAlreadyExistsError("username", username_obj.value)

        password_hash = self._password_service.hash(password)
        user = User.create(
            email=email_obj,
            username=username_obj,
            password_hash=password_hash,
            name=name,
            status=user_status,
        )
        await self._user_repo.save(user)

        logger.info("User registered: %s (%s)", user.username, user.id)
        return user

    async def login(
        self,
        identifier: str,
        password: str,
        ip: str,
        device: Device,
    ) -> tuple[User, str]:
        """Check credentials and open a session.

        Parameters
        ----------
        identifier
            Email address or username
        password
            Plaintext password
        ip
            Origin IP of the request
        device
            Device detected from the User-Agent header

        Returns
        -------
        The user and the signed session token

        Raises
        ------
        InvalidCredentialsError
            If the user is unknown or the password is wrong
        """
        if not identifier or not password:
            raise InvalidCredentialsError

        user = await self._user_repo.find_by_identifier(identifier)
        if user is None:
            logger.warning("Login failed: unknown identifier")
            raise InvalidCredentialsError

        if not self._password_service.verify(password, user.password_hash):
            logger.warning("Login failed: wrong password for user %s", user.id)
            raise InvalidCredentialsError

        await self._rehash_if_needed(user, password)

        token = await self._sessions.issue(user.id, ip=ip, device=device)

        logger.info("User logged in: %s", user.username)
        return user, token

    async def validate(self, token: str) -> AuthContext:
        """Resolve a bearer token into the caller's context.

        Raises
        ------
        InvalidTokenError
            If the token is malformed, expired or its user is gone
        SessionExpiredError
            If no unexpired session holds this token
        """
        payload = self._jwt_service.verify_token(token)

        user = await self._user_repo.find_by_id(payload.user_id)
        if user is None:
            logger.warning("Token for unknown user %s", payload.user_id)
            raise InvalidTokenError

        session = await self._sessions.get_active(user.id, token)
        if session is None:
            raise SessionExpiredError

        return AuthContext.create(user, session)

    async def change_password(
        self,
        auth: AuthContext,
        current_password: str,
        new_password: str,
    ) -> None:
        """Replace the password and sign out every other session.

        Raises
        ------
        InvalidTokenError
            If the user no longer exists
        InvalidCurrentPasswordError
            If current_password doesn't match
        PasswordUnchangedError
            If new_password equals current_password
        WeakPasswordError
            If new_password fails the complexity policy
        """
        user = await self._user_repo.find_by_id(auth.user_id)
        if user is None:
            raise InvalidTokenError

        if not self._password_service.verify(current_password, user.password_hash):
            raise InvalidCurrentPasswordError
        if current_password == new_password:
            raise PasswordUnchangedError

        user.change_password_hash(self._password_service.hash(new_password))
        await self._user_repo.save(user)
        await self._sessions.terminate_others(user.id, auth.token)

        logger.info("Password changed for user: %s", user.id)

    async def logout(self, auth: AuthContext) -> None:
        await self._sessions.revoke(auth.user_id, auth.token)
        logger.info("User logged out: %s", auth.username)

    def verify_token(self, token: str) -> TokenPayload:
        return self._jwt_service.verify_token(token)

    async def _rehash_if_needed(self, user: User, password: str) -> None:
        if not self._password_service.needs_rehash(user.password_hash):
            return
        try:
            new_hash = self._password_service.hash(password)
        except WeakPasswordError:
            # predates the current policy; keep the old hash
            logger.debug("Skipping rehash for user %s", user.id)
            return
        user.change_password_hash(new_hash)
        await self._user_repo.save(user)
        logger.info("Password hash upgraded for user %s", user.id)
