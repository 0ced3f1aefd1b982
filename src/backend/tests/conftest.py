"""
Pytest fixtures for StreakForge backend tests.
"""

import os
import secrets
from collections.abc import AsyncGenerator, Callable
from datetime import datetime, timedelta, timezone
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

# Set test environment variables before importing app
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing")
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DEBUG", "false")

TEST_EMAIL = "coder@example.com"
FIXED_NOW = datetime(2025, 6, 12, 10, 0, tzinfo=timezone.utc)


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Use asyncio backend for async tests."""
    return "asyncio"


@pytest.fixture
def app() -> Any:
    """FastAPI application with dependency overrides cleared after each test."""
    from main import app as fastapi_app

    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
async def client(app: Any) -> AsyncGenerator[AsyncClient, None]:
    """Async test client. Unhandled app errors come back as 500 responses."""
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def clock(fixed_now: datetime) -> Callable[[], datetime]:
    """Clock frozen at FIXED_NOW."""
    return lambda: fixed_now


@pytest.fixture
def make_user() -> Callable[..., Any]:
    """Factory for UserDocument instances."""
    from models.cosmos_documents import CurrentStatsDocument, UserDocument

    def _make(**overrides: Any) -> UserDocument:
        data: dict[str, Any] = {
            "id": "user-123",
            "email": TEST_EMAIL,
            "name": "Test Coder",
            "leetcode_username": "testcoder",
            "current_stats": CurrentStatsDocument(easy=0, medium=0, hard=0, total=0),
        }
        data.update(overrides)
        return UserDocument(**data)

    return _make


@pytest.fixture
def mock_user_repo() -> MagicMock:
    """User repository double."""
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=None)
    repo.get_by_email = AsyncMock(return_value=None)
    repo.save_cached_streak = AsyncMock(return_value=None)
    repo.save_unlock_ledger = AsyncMock(return_value=None)
    return repo


@pytest.fixture
def mock_party_repo() -> MagicMock:
    """Party repository double (no parties by default)."""
    repo = MagicMock()
    repo.count_created_by = AsyncMock(return_value=0)
    repo.count_joined_by = AsyncMock(return_value=0)
    return repo


@pytest.fixture
def mock_feed() -> MagicMock:
    """Submission feed double (no submissions by default)."""
    feed = MagicMock()
    feed.fetch_submissions = AsyncMock(return_value=[])
    return feed


@pytest.fixture
def make_token() -> Callable[..., str]:
    """Mint session tokens the way the identity frontend does."""
    from jose import jwt

    from core.config import settings

    def _make(email: str = TEST_EMAIL, expires_in: timedelta = timedelta(minutes=30)) -> str:
        now = datetime.now(timezone.utc)
        claims = {
            "sub": email,
            "exp": now + expires_in,
            "iat": now,
            "iss": settings.TOKEN_ISSUER,
            "aud": settings.TOKEN_AUDIENCE,
            "jti": secrets.token_urlsafe(16),
        }
        return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)

    return _make


@pytest.fixture
def auth_headers(make_token: Callable[..., str]) -> dict[str, str]:
    """Authentication headers carrying a valid token for TEST_EMAIL."""
    return {"Authorization": f"Bearer {make_token()}"}
