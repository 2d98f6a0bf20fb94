"""Middleware stack: request ids, error envelopes, rate limiting, CORS."""

import pytest
from httpx import ASGITransport, AsyncClient
from redis.exceptions import ConnectionError as RedisConnectionError

from footballiq.config import get_settings
from footballiq.main import create_app


class FakePipeline:
    def __init__(self, store: dict[str, int], fail: bool) -> None:
        self.store = store
        self.fail = fail
        self.keys: list[str] = []

    def incr(self, key: str) -> None:
        self.keys.append(key)

    def expire(self, key: str, seconds: int) -> None:
        pass

    async def execute(self) -> list[object]:
        if self.fail:
            raise RedisConnectionError("redis down")
        key = self.keys[0]
        self.store[key] = self.store.get(key, 0) + 1
        return [self.store[key], True]


class FakeRedis:
    """Just enough of redis.asyncio.Redis for the fixed-window counter."""

    def __init__(self, fail: bool = False) -> None:
        self.store: dict[str, int] = {}
        self.fail = fail

    def pipeline(self) -> FakePipeline:
        return FakePipeline(self.store, self.fail)


class TestRequestId:
    async def test_generated(self, client: AsyncClient):
        response = await client.get("/api/health/live")
        assert len(response.headers["X-Request-Id"]) == 36

    async def test_propagated(self, client: AsyncClient):
        response = await client.get("/api/health/live", headers={"X-Request-Id": "abc-123"})
        assert response.headers["X-Request-Id"] == "abc-123"


class TestErrorEnvelope:
    async def test_unknown_route(self, client: AsyncClient):
        response = await client.get("/api/nowhere")
        assert response.status_code == 404
        assert response.json() == {"detail": "Not Found", "status": "fail"}

    async def test_validation_messages_joined(self, client: AsyncClient):
        response = await client.post(
            "/api/auth/register",
            json={"username": "ab", "email": "ab@x.com", "password": "abc"},
        )
        assert response.status_code == 400
        detail = response.json()["detail"]
        assert detail.startswith("Username must be at least 3 characters long. ")
        assert "Password must be at least 8 characters long" in detail

    async def test_unhandled_error_is_generic(self, app):
        @app.get("/api/explode")
        async def explode():
            raise RuntimeError("kaboom")

        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as raw:
            response = await raw.get("/api/explode")
        assert response.status_code == 500
        assert response.json() == {"detail": "Something went wrong!", "status": "error"}

    async def test_development_exposes_details(self, database, monkeypatch):
        monkeypatch.setenv("FIQ_ENVIRONMENT", "development")
        get_settings.cache_clear()
        try:
            dev_app = create_app()
            dev_app.state.database = database
            dev_app.state.redis = None

            @dev_app.get("/api/explode")
            async def explode():
                raise RuntimeError("kaboom")

            transport = ASGITransport(app=dev_app, raise_app_exceptions=False)
            async with AsyncClient(transport=transport, base_url="http://test") as raw:
                response = await raw.get("/api/explode")
        finally:
            monkeypatch.undo()
            get_settings.cache_clear()

        body = response.json()
        assert response.status_code == 500
        assert body["error"] == "kaboom"
        assert "RuntimeError" in body["stack"]


class TestRateLimit:
    async def test_disabled_without_redis(self, client: AsyncClient):
        response = await client.get("/api/questions")
        assert "X-RateLimit-Limit" not in response.headers

    async def test_headers_on_api_requests(self, app, client: AsyncClient):
        app.state.redis = FakeRedis()
        response = await client.get("/api/questions")
        assert response.status_code == 200
        assert response.headers["X-RateLimit-Limit"] == "100"
        assert response.headers["X-RateLimit-Remaining"] == "99"

    async def test_auth_bucket_is_stricter(self, app, client: AsyncClient):
        app.state.redis = FakeRedis()
        payload = {"username": "ghost", "password": "Passw0rd!"}
        for _ in range(10):
            response = await client.post("/api/auth/login", json=payload)
            assert response.status_code == 401

        blocked = await client.post("/api/auth/login", json=payload)
        assert blocked.status_code == 429
        assert blocked.json() == {
            "detail": "Too many authentication attempts, please try again later.",
            "status": "fail",
        }
        assert blocked.headers["Retry-After"] == "900"
        assert blocked.headers["X-RateLimit-Remaining"] == "0"

        other = await client.get("/api/questions")
        assert other.status_code == 200

    async def test_api_bucket_message(self, app, client: AsyncClient):
        redis = FakeRedis()
        app.state.redis = redis
        for _ in range(100):
            await client.get("/api/questions/difficulties")
        blocked = await client.get("/api/questions/difficulties")
        assert blocked.status_code == 429
        assert blocked.json()["detail"] == "Too many requests from this IP, please try again later."

    @pytest.mark.parametrize("path", ["/api/health", "/api/health/ready", "/api/health/live"])
    async def test_probes_exempt(self, app, client: AsyncClient, path):
        app.state.redis = FakeRedis()
        response = await client.get(path)
        assert response.status_code == 200
        assert "X-RateLimit-Limit" not in response.headers

    async def test_redis_failure_passes_through(self, app, client: AsyncClient):
        app.state.redis = FakeRedis(fail=True)
        response = await client.get("/api/questions")
        assert response.status_code == 200


class TestCors:
    async def test_allowed_origin(self, client: AsyncClient):
        response = await client.get("/api/health/live", headers={"Origin": "http://localhost:5173"})
        assert response.headers["access-control-allow-origin"] == "http://localhost:5173"

    async def test_unknown_origin(self, client: AsyncClient):
        response = await client.get("/api/health/live", headers={"Origin": "http://evil.example"})
        assert "access-control-allow-origin" not in response.headers
