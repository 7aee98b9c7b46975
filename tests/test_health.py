import pytest
import pytest_asyncio

import app.db.async_session as async_session
from app.db.async_session import AsyncDatabaseManager


@pytest_asyncio.fixture
async def db_manager(test_db_url, monkeypatch):
    manager = AsyncDatabaseManager(database_url=test_db_url)
    monkeypatch.setattr(async_session, "_async_db_manager", manager)
    yield manager
    await manager.close()


@pytest.mark.asyncio
async def test_health_endpoint(client, db_manager):
    response = await client.get("/api/v1/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["database"] == "connected"
    assert body["service"] == "user-management-api"
    assert "response_time_ms" in body


@pytest.mark.asyncio
async def test_health_endpoint_database_down(client, db_manager, monkeypatch):
    async def failing_connection():
        return False

    monkeypatch.setattr(db_manager, "test_connection", failing_connection)

    response = await client.get("/api/v1/health")

    assert response.status_code == 503
    assert response.json()["database"] == "disconnected"


@pytest.mark.asyncio
async def test_root(client):
    response = await client.get("/")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
