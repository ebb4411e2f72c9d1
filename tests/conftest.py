"""Root test fixtures shared across all test types.

This conftest contains fixtures that can be used by both unit and integration tests.
Database-specific fixtures are in tests/integration/conftest.py.
"""

import os

# Set APP_ENV to testing before any app imports to disable rate limiting
os.environ.setdefault("APP_ENV", "testing")
# Disable SSL for local test database (PostgreSQL without SSL support)
os.environ.setdefault("DATABASE_SSL_MODE", "disable")
# The test client talks plain http
os.environ.setdefault("SECURE_COOKIE", "false")
# Cheap hashing keeps login-heavy tests fast
os.environ.setdefault("ARGON2_TIME_COST", "1")
os.environ.setdefault("ARGON2_MEMORY_COST", "1024")

# ruff: noqa: E402 - Imports must be after env var setup
from collections.abc import Generator
from unittest.mock import AsyncMock

import pytest

from src.timetrack.core.config import get_settings

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


@pytest.fixture
def mock_session() -> AsyncMock:
    """Database session double; services only commit, roll back and flush through it."""
    session = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    return session


@pytest.fixture
def override_settings(monkeypatch: pytest.MonkeyPatch) -> Generator:
    """Set settings fields for one test: ``override_settings(max_failed_login_attempts=3)``."""
    settings = get_settings()

    def _override(**values: object) -> None:
        for name, value in values.items():
            monkeypatch.setattr(settings, name, value)

    yield _override
