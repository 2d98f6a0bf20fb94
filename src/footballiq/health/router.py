"""Health, readiness, and liveness endpoints."""

import time
from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from footballiq.database import get_session

logger = structlog.get_logger()

router = APIRouter(prefix="/health", tags=["Health"])

_STARTED_AT = time.monotonic()


async def _ping(db: AsyncSession) -> None:
    result = await db.execute(text("SELECT 1"))
    result.scalar()


@router.get("")
async def health(
    db: AsyncSession = Depends(get_session),  # noqa: B008
) -> JSONResponse:
    """Process and database status. 503 when the database is unreachable."""
    body: dict[str, object] = {
        "uptime": round(time.monotonic() - _STARTED_AT, 3),
        "message": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    try:
        await _ping(db)
    except SQLAlchemyError as exc:
        logger.warning("health_check_failed", error=str(exc))
        body["message"] = "Service Unavailable"
        body["database"] = "disconnected"
        return JSONResponse(body, status_code=503)
    body["database"] = "connected"
    return JSONResponse(body)


@router.get("/ready")
async def readiness(
    db: AsyncSession = Depends(get_session),  # noqa: B008
) -> JSONResponse:
    """Readiness probe: ready once the database answers."""
    try:
        await _ping(db)
    except SQLAlchemyError as exc:
        return JSONResponse({"status": "not ready", "error": str(exc)}, status_code=503)
    return JSONResponse({"status": "ready"})


@router.get("/live")
async def liveness() -> dict[str, str]:
    """Liveness probe: returns 200 if the process is alive."""
    return {"status": "alive"}
