"""Health check endpoints. Used for liveness and readiness probes."""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.infrastructure.persistence import database
from app.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _not_ready(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=503,
        content=ReadinessErrorResponse(message=message).model_dump(),
    )


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Database not configured or unreachable", "model": ReadinessErrorResponse}},
)
async def readiness_check() -> ReadinessResponse | JSONResponse:
    """Return 200 if the database answers SELECT 1; 503 otherwise."""
    database._ensure_engine()
    if database.engine is None:
        return _not_ready("DATABASE_URL is not configured")
    try:
        async with database.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Readiness check failed: %s", e)
        return _not_ready("Database unreachable")
    return ReadinessResponse()
