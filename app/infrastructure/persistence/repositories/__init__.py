"""Persistence repositories. Re-exports for dependency injection."""

from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.persistence.repositories.post_repo import PostRepository
from app.infrastructure.persistence.repositories.tag_repo import TagRepository

__all__ = [
    "BaseRepository",
    "PostRepository",
    "TagRepository",
]
