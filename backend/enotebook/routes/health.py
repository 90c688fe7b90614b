"""
ENotebook Backend — Health Check Route
========================================

What:  Readiness endpoint for load balancers and container probes.
How:   Two checks, both required for the API to serve anything useful:
       the database answers SELECT 1, and a token signing secret is set.

Status levels:
    - healthy:   Both checks pass (HTTP 200)
    - unhealthy: Either fails (HTTP 503, stop routing traffic here)
"""

import logging
import time

from fastapi import APIRouter, Response
from sqlalchemy import text

from enotebook import __version__
from enotebook.config import settings
from enotebook.database import engine
from enotebook.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


async def _database_status() -> str:
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning("Health check: database unreachable: %s", str(e))
        return "disconnected"
    return "connected"


def _auth_status() -> str:
    return "configured" if settings.jwt_secret else "missing secret"


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable or no signing secret", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(response: Response) -> HealthResponse:
    database = await _database_status()
    auth = _auth_status()

    healthy = database == "connected" and auth == "configured"
    if not healthy:
        response.status_code = 503

    return HealthResponse(
        status="healthy" if healthy else "unhealthy",
        version=__version__,
        database=database,
        auth=auth,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
