"""
EasyBuild Content API - Health Check Route
============================================

What:  Health check endpoint for container probes and uptime monitoring.
How:   Acquires the shared connection (joining or starting an attempt) and
       pings the server.

Status levels:
    healthy:   MongoDB answered the ping (HTTP 200)
    unhealthy: MongoDB is unreachable or not configured (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Request, Response
from pymongo.errors import PyMongoError

from easybuild import __version__
from easybuild.database import ConnectionCache, redact_credentials
from easybuild.exceptions import ConfigurationError, DatabaseConnectionError
from easybuild.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unavailable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(request: Request, response: Response) -> HealthResponse:
    connections: ConnectionCache = request.app.state.connections
    db_status = "connected"

    try:
        db = await connections.acquire()
        await db.command("ping")
    except ConfigurationError:
        db_status = "not_configured"
    except (DatabaseConnectionError, PyMongoError) as exc:
        db_status = "disconnected"
        logger.warning("Health check: database unreachable: %s", redact_credentials(str(exc)))

    overall = "healthy" if db_status == "connected" else "unhealthy"
    if overall == "unhealthy":
        response.status_code = 503

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
