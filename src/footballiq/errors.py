"""Domain exceptions.

Every error raised on purpose by the service layer is an :class:`AppError`.
The global handler in ``footballiq.middleware.error_handler`` turns them into
JSON responses; only operational errors expose their message to clients.
"""

from __future__ import annotations


class AppError(Exception):
    """Base class for errors with an HTTP status and an operational flag."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None, *, is_operational: bool = True) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.is_operational = is_operational


class ValidationFailedError(AppError):
    status_code = 400


class AuthenticationError(AppError):
    status_code = 401


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    """Duplicate registration, already-answered question, finished session."""

    status_code = 400


class UnsafeQueryError(AppError):
    """A user query was rejected by the sandbox keyword or table policy."""

    status_code = 400


class SqlExecutionError(AppError):
    """The database refused a user query. ``error`` carries the driver text."""

    status_code = 400

    def __init__(self, error: str) -> None:
        super().__init__("SQL Error")
        self.error = error
