"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for DB sessions and application use cases.
Use cases are built from infrastructure implementations here; routes
depend only on these dependencies, not on infra directly.
"""

from app.api.v1.dependencies.posts import get_post_repo, get_tag_search_service

__all__ = [
    "get_post_repo",
    "get_tag_search_service",
]
