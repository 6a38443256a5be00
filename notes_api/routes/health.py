"""
Notes API - Health Check Route
===============================

GET /health: no token, not access-logged.

    200 {"status": "healthy",   "database": "connected", ...}
    503 {"status": "unhealthy", "database": "disconnected", ...}

The database is the only dependency; without it no note route can answer.
"""

import logging
import time

from fastapi import APIRouter, Response, status
from sqlalchemy import text

from notes_api import __version__
from notes_api import database
from notes_api.schemas.note import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_started_at = time.monotonic()


async def _database_reachable() -> bool:
    try:
        async with database.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning("Health check: database unreachable: %s", e)
        return False
    return True


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    responses={503: {"model": HealthResponse, "description": "Database unreachable"}},
)
async def health_check(response: Response) -> HealthResponse:
    reachable = await _database_reachable()
    if not reachable:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return HealthResponse(
        status="healthy" if reachable else "unhealthy",
        version=__version__,
        database="connected" if reachable else "disconnected",
        uptime_seconds=round(time.monotonic() - _started_at, 2),
    )
