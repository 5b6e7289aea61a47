"""Post ORM model. Owning side of the post-tag association."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import SmallInteger, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin

if TYPE_CHECKING:
    from app.infrastructure.persistence.models.tag import Tag


class Post(CuidMixin, TimestampMixin, Base):
    """Post (store review). Table: post.

    tags is a read-only projection of post_tag rows; attach and detach go
    through PostRepository, which writes PostTag rows directly.
    """

    __tablename__ = "post"

    store_name: Mapped[str] = mapped_column(String(100), nullable=False)
    body: Mapped[str | None] = mapped_column(Text, nullable=True)
    rating: Mapped[int | None] = mapped_column(SmallInteger, nullable=True)
    address: Mapped[str | None] = mapped_column(String(255), nullable=True)

    tags: Mapped[list[Tag]] = relationship(
        "Tag",
        secondary="post_tag",
        viewonly=True,
        order_by="Tag.name",
    )
