"""Middleware registration."""

from fastapi import FastAPI

from footballiq.config import Settings
from footballiq.middleware.access_log import AccessLogMiddleware
from footballiq.middleware.cors import setup_cors
from footballiq.middleware.error_handler import setup_error_handlers
from footballiq.middleware.logging import setup_logging
from footballiq.middleware.rate_limit import RateLimitMiddleware
from footballiq.middleware.request_id import RequestIdMiddleware


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Register all middleware in the correct order.

    FastAPI/Starlette executes middleware in reverse-add order (last added = outermost).
    CORS must be outermost so it wraps error responses from inner middleware (e.g. 429).
    """
    setup_logging(settings)
    setup_error_handlers(app, settings)
    app.add_middleware(
        RateLimitMiddleware,
        requests_per_window=settings.rate_limit_requests,
        window_seconds=settings.rate_limit_window_seconds,
        auth_requests_per_window=settings.rate_limit_auth,
    )
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RequestIdMiddleware)  # outside the access log so its line carries request_id
    setup_cors(app, settings)  # added last → outermost → wraps 429 responses
