"""
Test configuration and fixtures for pytest.

Each test runs against its own SQLite file so that requests, seeding and
assertions use separate sessions the way the application does.
"""

from typing import AsyncGenerator, Dict
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

import app.models  # noqa: F401
from app.db.async_session import enable_sqlite_foreign_keys, get_async_db
from app.db.base_class import Base
from app.main import app
from app.models import Capability, User
from tests.utils import auth_headers, make_user


@pytest.fixture
def test_db_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"


@pytest_asyncio.fixture
async def async_engine(test_db_url):
    """Create an async engine with all tables for a single test."""
    engine = create_async_engine(test_db_url, connect_args={"check_same_thread": False})
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(async_engine):
    return async_sessionmaker(
        bind=async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture(autouse=True)
def sent_emails(monkeypatch):
    """Capture verification emails instead of calling Resend."""
    from app.services.user import email_service

    mock_send = MagicMock(return_value=None)
    monkeypatch.setattr(email_service, "send_verification_email", mock_send)
    return mock_send


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the app, with a fresh session per request."""

    async def override_get_async_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_async_db] = override_get_async_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def admin_user(session_factory) -> User:
    """A verified user holding every users capability."""
    return await make_user(
        session_factory,
        name="Admin",
        email="admin@example.com",
        capabilities=list(Capability),
        verified=True,
    )


@pytest.fixture
def admin_headers(admin_user) -> Dict[str, str]:
    return auth_headers(admin_user)
