"""
QuickNotes Backend - Health Check Route
=========================================

What:  Health check endpoint for monitoring and container liveness checks.
How:   Runs SELECT 1 against the application's engine and reports the result.
When:  Polled periodically by Docker / load balancers; excluded from access logs.

Status levels:
    - healthy:   database reachable (HTTP 200)
    - unhealthy: database unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Depends, Response
from sqlalchemy import text

from app import __version__
from app.context import AppContext, get_app_context
from app.schemas.note import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    response: Response,
    ctx: AppContext = Depends(get_app_context),
) -> HealthResponse:
    """
    Check that the database answers a trivial query.

    Never raises: a failing check is reported in the body with HTTP 503.
    """
    db_status = "connected"
    overall = "healthy"

    try:
        async with ctx.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = 503
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - ctx.started_at, 2),
    )
