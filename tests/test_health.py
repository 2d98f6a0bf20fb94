"""Health, readiness and liveness probes."""

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

from footballiq.database import Database


class TestHealth:
    async def test_health_ok(self, client: AsyncClient):
        response = await client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "OK"
        assert data["database"] == "connected"
        assert data["uptime"] >= 0
        assert "timestamp" in data

    async def test_ready(self, client: AsyncClient):
        response = await client.get("/api/health/ready")
        assert response.status_code == 200
        assert response.json() == {"status": "ready"}

    async def test_live(self, client: AsyncClient):
        response = await client.get("/api/health/live")
        assert response.status_code == 200
        assert response.json() == {"status": "alive"}

    async def test_root(self, client: AsyncClient):
        data = (await client.get("/")).json()
        assert data["name"] == "Football-IQ API"
        assert data["environment"] == "test"


class TestHealthDatabaseDown:
    async def test_unreachable_database(self, app, client: AsyncClient, tmp_path):
        broken = Database(create_async_engine(f"sqlite+aiosqlite:///{tmp_path}/missing/dir/app.db"))
        app.state.database = broken
        try:
            health = await client.get("/api/health")
            assert health.status_code == 503
            assert health.json()["message"] == "Service Unavailable"
            assert health.json()["database"] == "disconnected"

            ready = await client.get("/api/health/ready")
            assert ready.status_code == 503
            assert ready.json()["status"] == "not ready"
            assert ready.json()["error"]

            live = await client.get("/api/health/live")
            assert live.status_code == 200
        finally:
            await broken.close()
