"""Tag repository. Lookup by exact (case-sensitive) name. Returns application DTOs."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.post import TagResult
from app.domain.exceptions import ValidationException
from app.infrastructure.persistence.models.tag import Tag
from app.infrastructure.persistence.repositories.base import BaseRepository

logger = logging.getLogger(__name__)

TAG_NAME_MAX_LENGTH = 50


def _tag_to_result(t: Tag) -> TagResult:
    """Map ORM Tag to application TagResult."""
    return TagResult(id=t.id, name=t.name)


class TagRepository(BaseRepository[Tag]):
    """Tag repository. Names are unique; no case folding is applied."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Tag)

    async def get_by_name(self, name: str) -> TagResult | None:
        """Return tag with exactly this name, or None."""
        result = await self.db.execute(select(Tag).where(Tag.name == name))
        orm = result.scalar_one_or_none()
        return _tag_to_result(orm) if orm else None

    async def get_by_names(self, names: set[str]) -> list[TagResult]:
        """Return tags whose name is in names (batch), ordered by name. Unknown names are skipped."""
        if not names:
            return []
        result = await self.db.execute(
            select(Tag).where(Tag.name.in_(names)).order_by(Tag.name)
        )
        return [_tag_to_result(t) for t in result.scalars().all()]

    async def get_or_create(self, name: str) -> TagResult:
        """Return the tag with this name, creating it if missing.

        Raises ValidationException for an empty name or one longer than
        TAG_NAME_MAX_LENGTH.
        """
        name = (name or "").strip()
        if not name:
            raise ValidationException("Tag name must not be empty", field="name")
        if len(name) > TAG_NAME_MAX_LENGTH:
            raise ValidationException(
                f"Tag name must be at most {TAG_NAME_MAX_LENGTH} characters",
                field="name",
            )
        existing = await self.get_by_name(name)
        if existing is not None:
            return existing
        try:
            async with self.db.begin_nested():
                tag = Tag(name=name)
                self.db.add(tag)
        except IntegrityError:
            # Concurrent insert of the same name; read the winner.
            found = await self.get_by_name(name)
            if found is None:
                raise
            return found
        logger.debug("Created tag %s", tag.id)
        return _tag_to_result(tag)
