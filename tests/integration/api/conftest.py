"""Pytest fixtures for API integration tests.

Every test gets its own SQLite database file, so requests issued through
the TestClient (which runs the app in its own event loop) and the
fixtures below never share connections.
"""

import asyncio

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from tests.shared.api_client import login_headers, register
from tests.shared.factories import STRONG_PASSWORD
from tests.shared.fixtures.database import enable_sqlite_foreign_keys
from warden.application.commands import UpdateUserRoleCommand
from warden.domain.user import UserRole
from warden.infrastructure.persistence.sqlalchemy.models import Base
from warden.infrastructure.persistence.sqlalchemy.repositories import (
    UserRepositorySQLAlchemy,
)
from warden.presentation.api.app import API_V1_PREFIX, create_app
from warden.presentation.api.dependencies import get_db_session
from warden_config.settings import Settings


def run_sync(coro):
    """Run a coroutine in a fresh event loop.

    Keeps fixture database work away from TestClient's loop.
    """
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@pytest.fixture
def api_v1_prefix() -> str:
    """Get the API v1 prefix for building URLs."""
    return API_V1_PREFIX


@pytest.fixture
def api_settings(tmp_path) -> Settings:
    """Test API settings with debug enabled."""
    return Settings(
        _env_file=None,
        jwt_secret_key=SecretStr("test-jwt-secret-for-testing-only"),
        database_dsn=f"sqlite+aiosqlite:///{tmp_path / 'warden.db'}",
        api_host="127.0.0.1",
        api_port=8080,
        api_debug=True,
        api_cors_origins="http://localhost:3000",
        api_cookie_secure=False,  # Allow HTTP in tests
        session_expire_days=30,
        bcrypt_rounds=4,  # Low rounds for fast tests
    )


@pytest.fixture
def async_engine(api_settings):
    """Engine for the per-test database file."""
    engine = create_async_engine(
        api_settings.database_url,
        echo=False,
        poolclass=NullPool,  # Connections never outlive an event loop
    )
    enable_sqlite_foreign_keys(engine)

    async def _setup():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    run_sync(_setup())
    yield engine
    run_sync(engine.dispose())


@pytest.fixture
def session_maker(async_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
def test_client(api_settings, session_maker):
    """Create a test client backed by the per-test SQLite database.

    The client is not entered as a context manager, so the application
    lifespan (schema creation on the production engine) does not run.
    """
    app = create_app(settings=api_settings)

    async def override_get_db_session():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session

    return TestClient(app)


@pytest.fixture
def promote(session_maker):
    """Grant the ADMIN role directly in the database."""

    def _promote(identifier: str) -> None:
        async def _run():
            async with session_maker() as session:
                repo = UserRepositorySQLAlchemy(session)
                user = await repo.find_by_identifier(identifier)
                assert user is not None, f"No user {identifier}"
                await UpdateUserRoleCommand(repo).execute(user.id, UserRole.ADMIN)
                await session.commit()

        run_sync(_run())

    return _promote


@pytest.fixture
def registered_user_data() -> dict:
    """Test user registration data."""
    return {
        "email": "api-test-user@example.com",
        "username": "api_tester",
        "password": STRONG_PASSWORD,
        "name": "Api Tester",
    }


@pytest.fixture
def registered_user(test_client, registered_user_data) -> dict:
    """Register the test user and return its profile."""
    return register(test_client, registered_user_data)


@pytest.fixture
def auth_headers(test_client, registered_user, registered_user_data) -> dict:
    """Get auth headers for a registered user."""
    return login_headers(
        test_client,
        registered_user_data["email"],
        registered_user_data["password"],
    )


@pytest.fixture
def admin_data() -> dict:
    return {
        "email": "admin@example.com",
        "username": "site_admin",
        "password": STRONG_PASSWORD,
    }


@pytest.fixture
def admin_user(test_client, promote, admin_data) -> dict:
    """Register an account and grant it the ADMIN role."""
    profile = register(test_client, admin_data)
    promote(admin_data["email"])
    return profile


@pytest.fixture
def admin_headers(test_client, admin_user, admin_data) -> dict:
    """Get auth headers for an administrator."""
    return login_headers(test_client, admin_data["email"], admin_data["password"])
