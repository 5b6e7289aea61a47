"""API request/response schemas (pydantic)."""

from app.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)
from app.schemas.post import PostResponse

__all__ = [
    "HealthResponse",
    "PostResponse",
    "ReadinessErrorResponse",
    "ReadinessResponse",
]
