"""Post repository: tag association store. Returns application DTOs.

Matching runs as one statement per search: a union (IN over the filtered
association rows) for ANY-of, and a grouped exact count for ALL-of. Tag
names of the matched posts are loaded with one batched select-in query.
"""

from __future__ import annotations

import logging

from sqlalchemy import Select, delete, distinct, func, select
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.application.dtos.post import PostResult
from app.domain.exceptions import ResourceNotFoundException, TagStoreUnavailableException
from app.infrastructure.persistence.models.post import Post
from app.infrastructure.persistence.models.tag import PostTag, Tag
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils.datetime import ensure_utc

logger = logging.getLogger(__name__)

# Errors that mean "store unreachable", as opposed to "no matching rows".
# TimeoutError (asyncpg command_timeout) is an OSError subclass.
_STORE_UNAVAILABLE_ERRORS = (OperationalError, InterfaceError, OSError)


def _post_to_result(p: Post, tag_names: frozenset[str] | None = None) -> PostResult:
    """Map ORM Post to application PostResult.

    tag_names must be passed explicitly unless Post.tags was eager-loaded.
    """
    return PostResult(
        id=p.id,
        store_name=p.store_name,
        body=p.body,
        rating=p.rating,
        address=p.address,
        tag_names=(
            tag_names
            if tag_names is not None
            else frozenset(t.name for t in p.tags)
        ),
        created_at=ensure_utc(p.created_at),
        updated_at=ensure_utc(p.updated_at),
    )


class PostRepository(BaseRepository[Post]):
    """Post repository and ITagAssociationStore implementation."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Post)

    async def create_post(
        self,
        store_name: str,
        body: str | None = None,
        rating: int | None = None,
        address: str | None = None,
    ) -> PostResult:
        """Insert a post with no tags."""
        post = await self.create(
            Post(store_name=store_name, body=body, rating=rating, address=address)
        )
        return _post_to_result(post, frozenset())

    async def get_post(self, post_id: str) -> PostResult | None:
        """Return post by id with its tag names, or None."""
        stmt = self._with_tags(select(Post).where(Post.id == post_id))
        posts = await self._fetch_posts(stmt, "get_post")
        return posts[0] if posts else None

    async def attach_tag(self, post_id: str, tag_id: str) -> bool:
        """Associate tag with post. Idempotent.

        Returns True if a new association was created, False if it already existed.
        Raises ResourceNotFoundException if the post or tag does not exist.
        """
        if await self.get_by_id(post_id) is None:
            raise ResourceNotFoundException("post", post_id)
        if await self.db.get(Tag, tag_id) is None:
            raise ResourceNotFoundException("tag", tag_id)
        existing = await self.db.execute(
            select(PostTag.id).where(
                PostTag.post_id == post_id, PostTag.tag_id == tag_id
            )
        )
        if existing.scalar_one_or_none() is not None:
            return False
        try:
            async with self.db.begin_nested():
                self.db.add(PostTag(post_id=post_id, tag_id=tag_id))
        except IntegrityError:
            # Concurrent attach of the same pair won the unique constraint.
            return False
        return True

    async def detach_tag(self, post_id: str, tag_id: str) -> bool:
        """Remove the association if present. Detaching an absent tag is a no-op.

        Returns True if a row was deleted.
        """
        result = await self.db.execute(
            delete(PostTag).where(
                PostTag.post_id == post_id, PostTag.tag_id == tag_id
            )
        )
        return (result.rowcount or 0) > 0

    async def find_posts_with_any_tag(self, tag_names: set[str]) -> list[PostResult]:
        """Posts with at least one tag in tag_names, each once, by id ascending."""
        if not tag_names:
            return []
        matching_ids = (
            select(PostTag.post_id)
            .join(Tag, Tag.id == PostTag.tag_id)
            .where(Tag.name.in_(tag_names))
        )
        stmt = self._with_tags(
            select(Post).where(Post.id.in_(matching_ids)).order_by(Post.id)
        )
        return await self._fetch_posts(stmt, "find_posts_with_any_tag")

    async def find_posts_with_all_tags(
        self, tag_names: set[str], required_count: int
    ) -> list[PostResult]:
        """Posts whose tags restricted to tag_names count exactly required_count distinct tags.

        required_count is the number of distinct requested names; a post with
        extra tags outside tag_names still qualifies.
        """
        if not tag_names or required_count <= 0:
            return []
        matching_ids = (
            select(PostTag.post_id)
            .join(Tag, Tag.id == PostTag.tag_id)
            .where(Tag.name.in_(tag_names))
            .group_by(PostTag.post_id)
            .having(func.count(distinct(PostTag.tag_id)) == required_count)
        )
        stmt = self._with_tags(
            select(Post).where(Post.id.in_(matching_ids)).order_by(Post.id)
        )
        return await self._fetch_posts(stmt, "find_posts_with_all_tags")

    @staticmethod
    def _with_tags(stmt: Select) -> Select:
        # populate_existing: posts already in the identity map get fresh tags.
        return stmt.options(selectinload(Post.tags)).execution_options(
            populate_existing=True
        )

    async def _fetch_posts(self, stmt: Select, operation: str) -> list[PostResult]:
        try:
            result = await self.db.execute(stmt)
        except _STORE_UNAVAILABLE_ERRORS as e:
            logger.error("Tag store query failed in %s: %s", operation, e)
            raise TagStoreUnavailableException(
                operation, reason=e.__class__.__name__
            ) from e
        return [_post_to_result(p) for p in result.scalars().all()]
