"""Root pytest configuration for test discovery and auto-skip behavior.

Test Structure:
    tests/
    ├── unit/              # Fast, isolated tests (no database)
    ├── integration/       # Repositories and HTTP API on SQLite
    │   ├── persistence/
    │   └── api/
    └── shared/            # Shared fixtures and utilities

Integration tests run on an in-memory / temporary SQLite database and
are therefore enabled by default. Tests that need a real PostgreSQL
server are marked ``@pytest.mark.postgres`` and auto-skipped.

Environment Variables:
    RUN_POSTGRES=1       Run @pytest.mark.postgres tests
    RUN_ALL_TESTS=1      Run all tests (overrides other settings)

Pytest Options:
    --run-postgres       Run tests against PostgreSQL
    --run-all            Run all tests
"""

import os
from pathlib import Path

# The application module builds its app at import time, which needs a
# signing secret. Tests must never depend on a developer's .env file.
os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret-for-testing-only")
os.environ.setdefault("DATABASE_DSN", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest  # noqa: E402
from dotenv import load_dotenv  # noqa: E402

from warden_config import clear_settings_cache  # noqa: E402

PROJECT_ROOT = Path(__file__).resolve().parents[1]

# Optional test overrides (never the development or production files)
CONFIG_DIR = PROJECT_ROOT / "config"
if (CONFIG_DIR / ".env.test").exists():
    load_dotenv(CONFIG_DIR / ".env.test")


def _flag_enabled(name: str) -> bool:
    return os.environ.get(name, "").lower() in ("1", "true", "yes")


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--run-postgres",
        action="store_true",
        default=False,
        help="Run tests marked with @pytest.mark.postgres",
    )
    parser.addoption(
        "--run-all",
        action="store_true",
        default=False,
        help="Run all tests regardless of markers",
    )


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: Tests that verify database/persistence or HTTP behavior",
    )
    config.addinivalue_line(
        "markers",
        "postgres: Tests requiring a PostgreSQL server (auto-skipped)",
    )
    config.addinivalue_line(
        "markers",
        "slow: Tests that take more than 1 second",
    )


def pytest_collection_modifyitems(config, items):
    """Auto-skip tests based on markers unless explicitly enabled."""
    if config.getoption("--run-all") or _flag_enabled("RUN_ALL_TESTS"):
        return

    run_postgres = config.getoption("--run-postgres") or _flag_enabled(
        "RUN_POSTGRES",
    )
    skip_postgres = pytest.mark.skip(
        reason="PostgreSQL test - run with --run-postgres or RUN_POSTGRES=1",
    )

    for item in items:
        item_markers = {mark.name for mark in item.iter_markers()}
        if not run_postgres and "postgres" in item_markers:
            item.add_marker(skip_postgres)


@pytest.fixture(scope="session", autouse=True)
def configure_app_settings():
    """Start and finish the test session with fresh settings."""
    clear_settings_cache()
    yield
    clear_settings_cache()
