"""Global error handler: consistent JSON error responses."""

import re
import traceback

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from footballiq.config import Settings
from footballiq.errors import AppError, SqlExecutionError

logger = structlog.get_logger()

GENERIC_MESSAGE = "Something went wrong!"

# Postgres: Key (email)=(a@b.c) already exists. SQLite: UNIQUE constraint failed: users.email
_PG_DUPLICATE = re.compile(r"Key \((?P<field>[^)]+)\)=")
_SQLITE_DUPLICATE = re.compile(r"UNIQUE constraint failed: \w+\.(?P<field>\w+)")


def _duplicate_field(exc: IntegrityError) -> str | None:
    message = str(exc.orig)
    match = _PG_DUPLICATE.search(message) or _SQLITE_DUPLICATE.search(message)
    return match.group("field") if match else None


def _validation_message(exc: RequestValidationError) -> str:
    """Join every validation error message into a single sentence list."""
    messages = []
    for error in exc.errors():
        msg = str(error.get("msg", "Invalid value"))
        msg = msg.removeprefix("Value error, ")
        if error.get("type") == "missing":
            field = error.get("loc", ("", "field"))[-1]
            msg = f"{field} is required"
        messages.append(msg)
    return ". ".join(messages)


def setup_error_handlers(app: FastAPI, settings: Settings) -> None:
    """Register global exception handlers."""

    def _failure(status_code: int, detail: str, **extra: object) -> JSONResponse:
        status = "fail" if 400 <= status_code < 500 else "error"
        return JSONResponse(
            status_code=status_code,
            content={"detail": detail, "status": status, **extra},
        )

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        """Operational domain errors carry a client-safe message."""
        if not exc.is_operational:
            logger.error("non_operational_error", path=request.url.path, error=exc.message)
            if not settings.is_development:
                return _failure(500, GENERIC_MESSAGE)
        if isinstance(exc, SqlExecutionError):
            return _failure(exc.status_code, exc.message, error=exc.error)
        return _failure(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
        """Handle HTTP exceptions with consistent JSON format."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail, "status": "fail" if exc.status_code < 500 else "error"},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
        """Validation errors become a single 400 with joined messages."""
        return _failure(400, _validation_message(exc))

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
        """Constraint violations that escaped the service layer."""
        field = _duplicate_field(exc)
        logger.warning("integrity_error", path=request.url.path, field=field)
        if field is None:
            return _failure(400, "Duplicate or invalid value.")
        return _failure(400, f"{field} already exists.")

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all for unhandled exceptions: always return JSON."""
        logger.error(
            "unhandled_exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            exc_info=exc,
        )
        if settings.is_development:
            return _failure(
                500,
                GENERIC_MESSAGE,
                error=str(exc),
                stack="".join(traceback.format_exception(exc)),
            )
        return _failure(500, GENERIC_MESSAGE)
