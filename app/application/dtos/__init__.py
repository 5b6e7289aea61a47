"""Application DTOs (no ORM dependency)."""

from app.application.dtos.post import PostResult, TagResult

__all__ = [
    "PostResult",
    "TagResult",
]
