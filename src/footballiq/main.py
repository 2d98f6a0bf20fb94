"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import redis.asyncio as aioredis
import structlog
from fastapi import FastAPI
from sqlalchemy.exc import SQLAlchemyError

from footballiq.auth.router import router as auth_router
from footballiq.config import get_settings
from footballiq.database import Database
from footballiq.games.router import router as games_router
from footballiq.health.router import router as health_router
from footballiq.middleware import setup_middleware
from footballiq.sql.router import router as sql_router
from footballiq.trivia.router import router as questions_router
from footballiq.trivia.seed import seed_questions

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup and shutdown lifecycle.

    A ``database`` or ``redis`` already attached to ``app.state`` (as tests do)
    is used as-is and left open on shutdown.
    """
    settings = get_settings()

    owns_database = getattr(app.state, "database", None) is None
    if owns_database:
        app.state.database = Database.from_url(settings.database_url, settings.dataset_database_url)

    owns_redis = not hasattr(app.state, "redis")
    if owns_redis:
        app.state.redis = aioredis.from_url(settings.redis_url, decode_responses=True) if settings.redis_url else None

    if settings.seed_questions_on_startup:
        try:
            async with app.state.database.session_factory() as db:
                await seed_questions(db)
        except SQLAlchemyError:
            logger.warning("question_seeding_failed", hint="run alembic upgrade head", exc_info=True)

    yield

    if owns_redis and app.state.redis is not None:
        await app.state.redis.aclose()
    if owns_database:
        await app.state.database.close()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Football-IQ API",
        description="Football trivia quiz and SQL-learning sandbox over a football statistics dataset",
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    setup_middleware(app, settings)
    app.include_router(health_router, prefix=settings.api_prefix)
    app.include_router(auth_router, prefix=settings.api_prefix)
    app.include_router(questions_router, prefix=settings.api_prefix)
    app.include_router(games_router, prefix=settings.api_prefix)
    app.include_router(sql_router, prefix=settings.api_prefix)

    @app.get("/", tags=["Health"])
    async def root() -> dict[str, str]:
        return {
            "name": "Football-IQ API",
            "version": settings.app_version,
            "environment": settings.environment,
        }

    return app


app = create_app()
