"""FastAPI dependency injection for the Warden API.

Provides dependencies for:
- Database sessions
- Authentication (caller context from bearer token or cookie)
- Service instances
"""

import logging
from datetime import timedelta
from functools import lru_cache
from typing import Annotated, AsyncGenerator

from fastapi import Cookie, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from warden.application.context import AuthContext
from warden.application.services import AuthenticationService, SessionService
from warden.infrastructure.persistence.sqlalchemy.models import Base
from warden.infrastructure.persistence.sqlalchemy.repositories import (
    SessionRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)
from warden.presentation.api.config import get_api_settings
from warden_auth import (
    InvalidTokenError,
    JWTService,
    PasswordHashingService,
    SessionExpiredError,
)
from warden_config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

# Security scheme for JWT Bearer tokens
security = HTTPBearer(auto_error=False)

# Cookie carrying the session token for browser clients
ACCESS_TOKEN_COOKIE = "access_token"  # NOQA: S105


# -----------------------------------------------------------------------------
# Database Engine & Session (Singleton)
# -----------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    """
    Get the shared async database engine (singleton).

    The engine manages the connection pool and is reused across all requests.

    Returns
    -------
    AsyncEngine instance
    """
    return create_async_engine(
        get_settings().database_url,
        echo=False,
        pool_pre_ping=True,  # Verify connections before use
    )


@lru_cache(maxsize=1)
def get_session_maker() -> async_sessionmaker[AsyncSession]:
    """
    Get the shared async session maker (singleton).

    Returns
    -------
    async_sessionmaker configured with the shared engine
    """
    return async_sessionmaker(
        get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    Creates an async session for the request using the shared engine/pool.

    Yields
    ------
    AsyncSession for database operations
    """
    async with get_session_maker()() as session:
        yield session


# Type alias for injected session
DBSession = Annotated[AsyncSession, Depends(get_db_session)]


async def create_tables() -> None:
    """
    Create all database tables (idempotent).

    Uses SQLAlchemy's create_all() which only creates missing tables.
    """
    engine = get_engine()
    logger.info("Ensuring all database tables exist...")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema is up to date (missing tables created if needed)")


# -----------------------------------------------------------------------------
# Authentication Services
# -----------------------------------------------------------------------------

SettingsDep = Annotated[Settings, Depends(get_api_settings)]


def get_jwt_service(settings: SettingsDep) -> JWTService:
    """Get JWT service configured with API settings."""
    return JWTService(
        secret_key=settings.jwt_secret_key.get_secret_value(),
        token_expire_days=settings.session_expire_days,
    )


def get_password_service(settings: SettingsDep) -> PasswordHashingService:
    """Get password hashing service."""
    return PasswordHashingService(rounds=settings.bcrypt_rounds)


def get_session_service(
    session: DBSession,
    settings: SettingsDep,
    jwt_service: JWTService = Depends(get_jwt_service),
) -> SessionService:
    """Get the session service bound to the request's database session."""
    return SessionService(
        session_repository=SessionRepositorySQLAlchemy(session),
        jwt_service=jwt_service,
        session_lifetime=timedelta(days=settings.session_expire_days),
    )


# Type alias for injected session service
Sessions = Annotated[SessionService, Depends(get_session_service)]


async def get_authentication_service(
    session: DBSession,
    session_service: Sessions,
    jwt_service: JWTService = Depends(get_jwt_service),
    password_service: PasswordHashingService = Depends(get_password_service),
) -> AuthenticationService:
    """
    Get authentication service with all dependencies.

    This service orchestrates registration, login, token validation and
    password changes.
    """
    return AuthenticationService(
        user_repository=UserRepositorySQLAlchemy(session),
        session_service=session_service,
        password_service=password_service,
        jwt_service=jwt_service,
    )


# Type alias for injected auth service
AuthService = Annotated[AuthenticationService, Depends(get_authentication_service)]


# -----------------------------------------------------------------------------
# Current Caller (token validation)
# -----------------------------------------------------------------------------


def get_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    access_token: Annotated[str | None, Cookie(alias=ACCESS_TOKEN_COOKIE)] = None,
) -> str | None:
    """Extract the token from the Authorization header, else the cookie."""
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return access_token or None


async def get_auth_context(
    auth_service: AuthService,
    token: str | None = Depends(get_bearer_token),
) -> AuthContext:
    """
    FastAPI dependency resolving the caller from their token.

    The token must verify and must still be held by an unexpired session.

    Raises
    ------
    HTTPException
        401 if token is missing, invalid, or has no active session
    """
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        return await auth_service.validate(token)
    except InvalidTokenError as e:
        logger.warning("Invalid token: %s", e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        ) from e
    except SessionExpiredError as e:
        logger.info("Rejected token without active session")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        ) from e


# Type alias for injected caller context
CurrentAuth = Annotated[AuthContext, Depends(get_auth_context)]


async def require_admin(auth: CurrentAuth) -> AuthContext:
    """Require admin user."""
    if not auth.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return auth


# Type alias for admin caller
AdminAuth = Annotated[AuthContext, Depends(require_admin)]
