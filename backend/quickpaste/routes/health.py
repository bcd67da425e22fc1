"""
QuickPaste Backend - Health Check Route
========================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   With the database backend, runs SELECT 1 on the engine. The memory
       backend has nothing to probe and is always reported healthy.
Who:   Called by Docker health checks, load balancers, and monitoring systems.
"""

import logging
import time

from fastapi import APIRouter, Request
from sqlalchemy import text

from quickpaste import __version__
from quickpaste.schemas.paste import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(request: Request) -> HealthResponse:
    """Probe the store's database (if any) and report aggregate status."""
    engine = getattr(request.app.state, "engine", None)
    store_status = "memory"
    overall = "healthy"

    if engine is not None:
        store_status = "connected"
        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            store_status = "disconnected"
            overall = "unhealthy"
            logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        store=store_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
