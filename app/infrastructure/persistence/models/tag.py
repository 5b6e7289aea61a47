"""Tag and PostTag ORM models."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CuidMixin

if TYPE_CHECKING:
    from app.infrastructure.persistence.models.post import Post


class Tag(CuidMixin, Base):
    """Tag. Table: tag. Name is unique and matched exactly (case-sensitive)."""

    __tablename__ = "tag"

    name: Mapped[str] = mapped_column(String(50), nullable=False)

    # Inverse view of post_tag; never mutated through this side.
    posts: Mapped[list[Post]] = relationship(
        "Post",
        secondary="post_tag",
        viewonly=True,
    )

    __table_args__ = (UniqueConstraint("name", name="uq_tag_name"),)


class PostTag(CuidMixin, Base):
    """Many-to-many post-tag association. Table: post_tag. Unique (post_id, tag_id)."""

    __tablename__ = "post_tag"

    post_id: Mapped[str] = mapped_column(
        String, ForeignKey("post.id", ondelete="CASCADE"), nullable=False
    )
    tag_id: Mapped[str] = mapped_column(
        String, ForeignKey("tag.id", ondelete="CASCADE"), nullable=False
    )
    attached_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("post_id", "tag_id", name="uq_post_tag"),
        Index("ix_post_tag_tag_id_post_id", "tag_id", "post_id"),
    )
