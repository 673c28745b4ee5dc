"""FastAPI application factory.

Creates and configures the FastAPI application with all routers,
middleware, and exception handlers.

API Versioning:
    All API endpoints are versioned under /api/v1/ prefix.
    The health check endpoint remains unversioned at /health.
"""

import logging
import sys
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncEngine

from warden.infrastructure.persistence.sqlalchemy.models import Base
from warden.presentation.api.config import get_api_settings
from warden.presentation.api.dependencies import get_engine
from warden.presentation.api.exception_handlers import setup_exception_handlers
from warden.presentation.api.routers import (
    admin_router,
    auth_router,
    sessions_router,
    users_router,
)
from warden.presentation.api.schemas.common import HealthResponse
from warden_config.settings import Settings, get_settings


@lru_cache(maxsize=1)
def _configure_logging() -> None:
    """Configure application logging.

    Sets up logging for the warden application with:
    - Console output with timestamps and module names
    - Configurable log level for warden modules (from settings)
    - WARNING level for noisy third-party libraries
    """
    settings = get_settings()
    log_level_str = settings.log_level.upper()
    log_level = getattr(logging, log_level_str, logging.INFO)

    log_format = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt=date_format,
        stream=sys.stdout,
        force=True,  # Override any existing config
    )

    logging.getLogger("warden").setLevel(log_level)
    logging.getLogger("warden_auth").setLevel(log_level)

    # Quiet down noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)

# API version info
API_VERSION = "1.0.0"
API_V1_PREFIX = "/api/v1"

# OpenAPI tags metadata for documentation
OPENAPI_TAGS = [
    {
        "name": "Authentication",
        "description": """Registration, login and password management.

**Login:**
- Identify with email address or username
- Every login opens a server-side session bound to the returned token
- The token is accepted as `Authorization: Bearer` header or `access_token` cookie

**Security:**
- Passwords are hashed with bcrypt and never returned
- Logging out or changing the password revokes sessions immediately
""",
    },
    {
        "name": "User",
        "description": "The caller's own profile and account deletion.",
    },
    {
        "name": "Sessions",
        "description": """Login sessions of the caller.

- The current session is listed first and flagged `current`
- Other sessions can be revoked one by one or all at once
""",
    },
    {
        "name": "Admin",
        "description": "User administration. Requires the `ADMIN` role.",
    },
    {
        "name": "Health",
        "description": "Service health monitoring endpoints.",
    },
    {
        "name": "Info",
        "description": "API information and discovery.",
    },
]


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info("Starting Warden API v%s...", API_VERSION)
    engine = get_engine()
    await _init_database_schema(engine)
    yield

    # Shutdown - dispose the shared engine and its connection pool
    logger.info("Shutting down Warden API...")
    await engine.dispose()
    logger.info("Database connections closed")


async def _init_database_schema(engine: AsyncEngine) -> None:
    """Initialize database schema (if not existent) and verify connectivity."""
    logger.info("Initializing database schema...")
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except ConnectionRefusedError:
        logger.critical("Could not connect to the database.")
        raise SystemExit(1) from None

    logger.info("Database schema initialized successfully")


def create_v1_router() -> APIRouter:
    """Create the v1 API router with all endpoints.

    Returns
    -------
    APIRouter with all v1 endpoints mounted.
    """
    v1_router = APIRouter()

    v1_router.include_router(auth_router, prefix="/auth", tags=["Authentication"])
    v1_router.include_router(users_router, prefix="/user", tags=["User"])
    v1_router.include_router(sessions_router, prefix="/sessions", tags=["Sessions"])
    v1_router.include_router(admin_router, prefix="/admin", tags=["Admin"])

    return v1_router


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    settings
        Optional settings override for testing. When given, it also
        replaces the settings seen by request dependencies.

    Returns
    -------
    Configured FastAPI application instance.
    """
    # Configure logging on first app creation (not on module import)
    _configure_logging()

    settings_override = settings
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=f"{settings.app_name} API",
        description=(
            "User registration, **session-backed JWT authentication** "
            "and account administration."
        ),
        version=API_VERSION,
        docs_url="/docs" if settings.api_debug else None,
        redoc_url="/redoc" if settings.api_debug else None,
        openapi_url="/openapi.json" if settings.api_debug else None,
        lifespan=lifespan,
        openapi_tags=OPENAPI_TAGS,
    )

    if settings_override is not None:
        app.dependency_overrides[get_api_settings] = lambda: settings_override

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register domain exception handlers for consistent error responses
    setup_exception_handlers(app)

    app.include_router(create_v1_router(), prefix=API_V1_PREFIX)

    # Health check endpoint (unversioned - always accessible)
    @app.get("/health", tags=["Health"])
    async def health_check() -> HealthResponse:
        """Health check endpoint.

        Unversioned for load balancer/monitoring compatibility.
        """
        return HealthResponse(status="healthy", version=API_VERSION)

    @app.get("/", tags=["Info"])
    async def root() -> dict:
        """API root endpoint with version information."""
        return {
            "name": f"{settings.app_name} API",
            "version": API_VERSION,
            "docs": "/docs" if settings.api_debug else None,
            "api_base": API_V1_PREFIX,
            "endpoints": {
                "health": "/health",
                "auth": f"{API_V1_PREFIX}/auth",
                "user": f"{API_V1_PREFIX}/user",
                "sessions": f"{API_V1_PREFIX}/sessions",
                "admin": f"{API_V1_PREFIX}/admin",
            },
        }

    return app


# Application instance for uvicorn
app = create_app()
