"""Pytest fixtures and configuration."""

import os
from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

# Set test environment variables before importing the app
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing-at-least-32-characters-long")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from afterburner.main import app


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient]:
    """Async HTTP client for testing the site."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def mock_db_session():
    """Create a mock database session."""
    mock_session = AsyncMock()
    mock_session.add = MagicMock()
    mock_session.delete = AsyncMock()
    mock_session.flush = AsyncMock()
    mock_session.refresh = AsyncMock()
    return mock_session


@pytest.fixture(autouse=True)
def clear_overrides():
    """Drop dependency overrides after every test."""
    yield
    app.dependency_overrides.clear()
