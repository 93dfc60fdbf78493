"""Health check endpoints."""

import logging
from datetime import UTC, datetime

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from app.core.config import settings
from app.core.database import ReadyState
from app.core.deps import DatabaseHandle
from app.schemas.health import (
    AuthHealthResponse,
    DbHealthError,
    DbHealthResponse,
    LivenessResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check() -> LivenessResponse:
    """
    Liveness probe for container orchestration.

    Simple check that the service is running.
    """
    return LivenessResponse(status="alive")


@router.get(
    "/health/db",
    response_model=DbHealthResponse,
    responses={500: {"model": DbHealthError}},
)
async def database_health(database: DatabaseHandle) -> DbHealthResponse | JSONResponse:
    """
    Database liveness probe.

    ``ok`` is true only when the handle's ready-state is CONNECTED. A driver
    error while pinging is reported as a 500 without leaking details.
    """
    try:
        state = await database.probe()
    except PyMongoError:
        logger.exception("Database health probe failed")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=DbHealthError(error="DB connection failed").model_dump(),
        )

    return DbHealthResponse(
        ok=state is ReadyState.CONNECTED,
        state=int(state),
        now=datetime.now(UTC).isoformat(),
    )


@router.get("/auth/health", response_model=AuthHealthResponse)
async def auth_health() -> AuthHealthResponse:
    """Report which required auth environment variables are missing."""
    missing = settings.missing_auth_env()
    if missing:
        logger.warning("Auth configuration incomplete: missing %s", ", ".join(missing))
    return AuthHealthResponse(ok=not missing, missing=missing)
