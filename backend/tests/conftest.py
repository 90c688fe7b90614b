"""
ENotebook Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for service unit tests (no DB)
    ├── database:        Fresh tables in a temporary SQLite file
    ├── test_client:     HTTPX AsyncClient bound to the ASGI app (needs database)
    └── register:        Async helper that creates a user and returns its token
"""

import os
import tempfile

# Override settings for testing BEFORE any enotebook import: settings, the
# engine and the auth header are all built at import time.
_test_db_dir = tempfile.mkdtemp(prefix="enotebook_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_test_db_dir}/test.db"
os.environ["JWT_SECRET"] = "test-secret-not-for-production-use-0123456789"
os.environ["BCRYPT_ROUNDS"] = "4"  # Fastest allowed cost; hashing speed is irrelevant here
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["AUTH_HEADER_NAME"] = "auth-token"
os.environ["USER_ADMIN_REQUIRES_AUTH"] = "true"
os.environ.pop("TOKEN_EXPIRE_MINUTES", None)

from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from enotebook.database import create_tables, dispose_engine, drop_tables  # noqa: E402


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_missing(mock_db_session):
            result = MagicMock()
            result.scalar_one_or_none.return_value = None
            mock_db_session.execute.return_value = result
            ...
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.delete = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def database():
    """Empty users and notes tables for one test."""
    await drop_tables()
    await create_tables()
    yield
    await drop_tables()
    await dispose_engine()


@pytest_asyncio.fixture
async def test_client(database):
    """
    Provides an async HTTP test client for endpoint testing.

    Uses ASGITransport to route requests directly to the app; no server runs.
    """
    from enotebook.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def register(test_client):
    """
    Async helper: register a user and return their token.

    Usage:
        token = await register("Alice", "a@x.com", "secret1")
    """
    async def _register(name: str, email: str, password: str = "secret1") -> str:
        response = await test_client.post(
            "/api/auth/create-user",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        return response.json()["authToken"]

    return _register
