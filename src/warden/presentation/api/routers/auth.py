"""Authentication router for registration, login, and session tokens."""

import logging

from fastapi import APIRouter, HTTPException, Response, status

from warden.domain.shared.exceptions import DomainException
from warden.domain.user import UserNotFoundError
from warden.infrastructure.persistence.sqlalchemy.repositories import (
    UserRepositorySQLAlchemy,
)
from warden.presentation.api.dependencies import (
    ACCESS_TOKEN_COOKIE,
    AuthService,
    CurrentAuth,
    DBSession,
    SettingsDep,
)
from warden.presentation.api.request_info import ClientDevice, ClientIP
from warden.presentation.api.schemas.auth import (
    ChangePasswordRequest,
    LoginRequest,
    ProfileResponse,
    RegisterRequest,
    TokenResponse,
)
from warden_auth import (
    InvalidCredentialsError,
    InvalidCurrentPasswordError,
    InvalidTokenError,
    PasswordUnchangedError,
    WeakPasswordError,
)
from warden_config.settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter()


def _set_access_token_cookie(
    response: Response,
    token: str,
    settings: Settings,
) -> None:
    """Set the session token as an HttpOnly cookie.

    This cookie is:
    - HttpOnly: Not accessible to JavaScript (XSS protection)
    - Secure: Only sent over HTTPS (when cookie_secure=True)
    - SameSite: Prevents CSRF attacks
    """
    response.set_cookie(
        key=ACCESS_TOKEN_COOKIE,
        value=token,
        httponly=True,
        secure=settings.api_cookie_secure,
        samesite=settings.api_cookie_samesite,
        max_age=settings.session_max_age_seconds,
        path="/",
        domain=settings.api_cookie_domain,
    )


def _clear_access_token_cookie(response: Response, settings: Settings) -> None:
    """Clear the session token cookie (for logout)."""
    response.delete_cookie(
        key=ACCESS_TOKEN_COOKIE,
        path="/",
        domain=settings.api_cookie_domain,
    )


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    responses={
        201: {"description": "User registered successfully"},
        400: {"description": "Weak password"},
        422: {"description": "Email or username already taken, or invalid input"},
    },
)
async def register(
    request: RegisterRequest,
    auth_service: AuthService,
    session: DBSession,
) -> ProfileResponse:
    """
    Create a new account.

    The password must be 8-20 characters long and contain lower and upper
    case letters plus one of ``@$!%*?&``. New accounts start deactivated.
    """
    try:
        user = await auth_service.register(
            email=request.email,
            username=request.username,
            password=request.password,
            name=request.name,
        )
        await session.commit()

    except WeakPasswordError as e:
        await session.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message,
        ) from e
    except DomainException:
        await session.rollback()
        raise
    except Exception as e:
        await session.rollback()
        logger.exception("Registration failed: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Registration failed",
        ) from e

    return ProfileResponse.from_user(user)


@router.post(
    "/login",
    summary="Authenticate user",
    responses={
        200: {"description": "Login successful, session opened"},
        401: {"description": "Invalid credentials"},
    },
)
async def login(
    request: LoginRequest,
    response: Response,
    auth_service: AuthService,
    session: DBSession,
    settings: SettingsDep,
    ip: ClientIP,
    device: ClientDevice,
) -> TokenResponse:
    """
    Authenticate with email or username and password.

    Opens a server-side session and returns its token. The token is also
    set as an HttpOnly cookie for browser clients.
    """
    try:
        _, token = await auth_service.login(
            identifier=request.identifier,
            password=request.password,
            ip=ip,
            device=device,
        )
        await session.commit()

    except InvalidCredentialsError as e:
        await session.rollback()
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        ) from e
    except DomainException:
        await session.rollback()
        raise

    _set_access_token_cookie(response, token, settings)

    payload = auth_service.verify_token(token)
    return TokenResponse(token=token, expires_at=payload.exp)


@router.get(
    "/profile",
    summary="Get current user profile",
    responses={
        200: {"description": "Current user data"},
        401: {"description": "Not authenticated"},
    },
)
async def get_profile(auth: CurrentAuth, session: DBSession) -> ProfileResponse:
    """Return the authenticated user's profile."""
    user = await UserRepositorySQLAlchemy(session).find_by_id(auth.user_id)
    if user is None:
        raise UserNotFoundError(auth.user_id)
    return ProfileResponse.from_user(user)


@router.post(
    "/change-password",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Change password",
    responses={
        204: {"description": "Password changed, other sessions signed out"},
        400: {"description": "Wrong current password, unchanged or weak password"},
        401: {"description": "Not authenticated"},
    },
)
async def change_password(
    request: ChangePasswordRequest,
    auth: CurrentAuth,
    auth_service: AuthService,
    session: DBSession,
) -> None:
    """
    Change the current user's password.

    Every session except the one making this request is terminated.
    """
    try:
        await auth_service.change_password(
            auth,
            current_password=request.current_password,
            new_password=request.new_password,
        )
        await session.commit()

    except InvalidTokenError as e:
        await session.rollback()
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        ) from e
    except (
        InvalidCurrentPasswordError,
        PasswordUnchangedError,
        WeakPasswordError,
    ) as e:
        await session.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message,
        ) from e
    except DomainException:
        await session.rollback()
        raise


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Logout user",
    responses={
        204: {"description": "Session revoked and cookie cleared"},
        401: {"description": "Not authenticated"},
    },
)
async def logout(
    response: Response,
    auth: CurrentAuth,
    auth_service: AuthService,
    session: DBSession,
    settings: SettingsDep,
) -> None:
    """Revoke the current session."""
    await auth_service.logout(auth)
    await session.commit()
    _clear_access_token_cookie(response, settings)
