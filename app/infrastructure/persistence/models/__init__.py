"""Persistence models: ORM entities and mixins."""

from app.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin
from app.infrastructure.persistence.models.post import Post
from app.infrastructure.persistence.models.tag import PostTag, Tag

__all__ = [
    "CuidMixin",
    "Post",
    "PostTag",
    "Tag",
    "TimestampMixin",
]
