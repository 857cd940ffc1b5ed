"""
TutorHub Backend — Health Check Route
======================================

What:  Liveness/readiness probe for load balancers and container health checks.
How:   Runs `SELECT 1` against the database and reports whether the geocoder
       has a credential. The geocoder is not called: a probe every few
       seconds would burn provider quota.

Status levels:
    healthy:   database reachable, geocoder configured
    degraded:  database reachable, geocoder unconfigured (logins work,
               registrations fail)
    unhealthy: database unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text

from tutorhub import __version__
from tutorhub.database import engine
from tutorhub.dependencies import get_geocoder
from tutorhub.schemas.common import HealthResponse
from tutorhub.services.geocoding import Geocoder

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(geocoder: Geocoder = Depends(get_geocoder)):
    db_status = "connected"
    overall = "healthy"

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    geocoder_status = "configured" if geocoder.configured else "unconfigured"
    if geocoder_status == "unconfigured" and overall == "healthy":
        overall = "degraded"

    body = HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        geocoder=geocoder_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    status_code = 503 if overall == "unhealthy" else 200
    return JSONResponse(status_code=status_code, content=body.model_dump())
