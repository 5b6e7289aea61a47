"""Post search API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from app.application.dtos.post import PostResult


class PostResponse(BaseModel):
    """Post projection returned by tag search. Tags are names, not tag objects."""

    id: str
    store_name: str
    body: str | None = None
    rating: int | None = None
    tags: list[str] = Field(
        default_factory=list, description="Distinct tag names, sorted"
    )
    created_at: datetime

    @classmethod
    def from_result(cls, post: PostResult) -> "PostResponse":
        """Build the response projection from an application PostResult."""
        return cls(
            id=post.id,
            store_name=post.store_name,
            body=post.body,
            rating=post.rating,
            tags=sorted(post.tag_names),
            created_at=post.created_at,
        )
