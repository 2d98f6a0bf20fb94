"""Redis-backed fixed window rate limiting middleware."""

import time
from typing import Any

import structlog
from redis.exceptions import RedisError
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

logger = structlog.get_logger()

# Probes must answer even when a client is throttled.
_EXEMPT_SUFFIXES = ("/health", "/health/ready", "/health/live")
_AUTH_SUFFIXES = ("/auth/login", "/auth/register")


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Rate limit requests per IP using Redis counters.

    The Redis client is read from ``app.state.redis``; when it is ``None`` or
    Redis is unreachable, requests pass through unthrottled.
    """

    def __init__(
        self,
        app: Any,  # noqa: ANN401
        requests_per_window: int = 100,
        window_seconds: int = 900,
        auth_requests_per_window: int = 10,
    ) -> None:
        super().__init__(app)
        self.requests_per_window = requests_per_window
        self.window_seconds = window_seconds
        self.auth_requests_per_window = auth_requests_per_window

    def _bucket(self, path: str) -> tuple[str, int]:
        if path.endswith(_AUTH_SUFFIXES):
            return "auth", self.auth_requests_per_window
        return "api", self.requests_per_window

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        """Check rate limit, return 429 if exceeded."""
        path = request.url.path
        redis = getattr(request.app.state, "redis", None)
        if redis is None or path.endswith(_EXEMPT_SUFFIXES):
            return await call_next(request)

        bucket, limit = self._bucket(path)
        client_ip = request.client.host if request.client else "unknown"
        window = int(time.time()) // self.window_seconds
        rate_key = f"ratelimit:{bucket}:{client_ip}:{window}"

        try:
            pipe = redis.pipeline()
            pipe.incr(rate_key)
            pipe.expire(rate_key, self.window_seconds + 1)
            results: list[Any] = await pipe.execute()
        except RedisError as exc:
            logger.warning("rate_limit_unavailable", error=str(exc))
            return await call_next(request)

        current_count: int = results[0]
        remaining = max(0, limit - current_count)

        if current_count > limit:
            message = (
                "Too many authentication attempts, please try again later."
                if bucket == "auth"
                else "Too many requests from this IP, please try again later."
            )
            return JSONResponse(
                status_code=429,
                content={"detail": message, "status": "fail"},
                headers={
                    "Retry-After": str(self.window_seconds),
                    "X-RateLimit-Remaining": "0",
                    "X-RateLimit-Limit": str(limit),
                },
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Remaining"] = str(remaining)
        response.headers["X-RateLimit-Limit"] = str(limit)
        return response
