"""Async SQLAlchemy engine and session management.

The :class:`Database` handle is built once per application (see ``main.lifespan``)
and stored on ``app.state.database``. Request handlers reach it through the
:func:`get_session` dependency, so tests can attach an in-memory handle instead.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Any

from fastapi import Request
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)


def _engine_options(url: str) -> dict[str, Any]:
    """Pool options for a given DSN. SQLite drivers do not accept pool sizing."""
    if make_url(url).get_backend_name() == "sqlite":
        return {}
    return {
        "pool_size": 20,
        "max_overflow": 10,
        "pool_pre_ping": True,
        "connect_args": {"statement_cache_size": 0},
    }


def build_engine(url: str) -> AsyncEngine:
    """Create an async engine for the given DSN."""
    return create_async_engine(url, echo=False, **_engine_options(url))


class Database:
    """Owns the application engine, its session factory and the dataset engine."""

    def __init__(self, engine: AsyncEngine, dataset_engine: AsyncEngine | None = None) -> None:
        self.engine = engine
        self.dataset_engine = dataset_engine or engine
        self.session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_url(cls, url: str, dataset_url: str | None = None) -> Database:
        engine = build_engine(url)
        dataset_engine = build_engine(dataset_url) if dataset_url else None
        return cls(engine, dataset_engine)

    async def close(self) -> None:
        """Dispose of every engine owned by this handle."""
        if self.dataset_engine is not self.engine:
            await self.dataset_engine.dispose()
        await self.engine.dispose()


def get_database(request: Request) -> Database:
    """Return the datastore handle attached to the running application."""
    database: Database | None = getattr(request.app.state, "database", None)
    if database is None:
        msg = "Database not initialized. Attach a Database to app.state first."
        raise RuntimeError(msg)
    return database


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield an async database session (FastAPI dependency)."""
    database = get_database(request)
    async with database.session_factory() as session:
        yield session
