"""Tag search use case. Delegates matching to ITagAssociationStore."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from app.application.dtos.post import PostResult
from app.domain.enums import TagMatchMode
from app.domain.exceptions import ValidationException
from app.shared.telemetry.tracing import add_span_attributes, traced

if TYPE_CHECKING:
    from app.application.interfaces.repositories import ITagAssociationStore

logger = logging.getLogger(__name__)


def normalize_tag_names(tag_names: Iterable[str | None] | None) -> set[str]:
    """Return the distinct, whitespace-stripped, non-empty names.

    Case is preserved: "Cafe" and "cafe" are different tags.
    """
    if not tag_names:
        return set()
    return {name.strip() for name in tag_names if name and name.strip()}


class TagSearchService:
    """Search posts by tag set under ANY-of (OR) or ALL-of (AND) matching.

    Stateless: every call reads the store; nothing is cached between calls.
    """

    def __init__(
        self,
        association_store: "ITagAssociationStore",
        *,
        strict_mode: bool = False,
    ) -> None:
        self.association_store = association_store
        self.strict_mode = strict_mode

    def resolve_mode(self, condition: str | None) -> TagMatchMode:
        """Map condition to a match mode.

        Case-insensitive "AND" selects AND; anything else selects OR. In
        strict mode a non-empty value other than AND/OR raises
        ValidationException instead of falling back.
        """
        if self.strict_mode and condition and not TagMatchMode.is_known(condition):
            raise ValidationException(
                f"Unknown search condition {condition!r}; expected one of "
                f"{', '.join(TagMatchMode.values())}",
                field="condition",
            )
        return TagMatchMode.parse(condition)

    @traced("tag_search.search")
    async def search(
        self,
        tag_names: list[str] | None,
        condition: str | None = None,
    ) -> list[PostResult]:
        """Return posts matching tag_names under condition, by post id ascending.

        Empty or missing tag_names returns [] without touching the store.
        Unknown tag names never match. Store failures propagate as
        TagStoreUnavailableException.
        """
        names = normalize_tag_names(tag_names)
        if not names:
            return []
        mode = self.resolve_mode(condition)

        add_span_attributes(**{"tag_search.mode": mode.value, "tag_search.tag_count": len(names)})
        logger.debug("Tag search: mode=%s, distinct_tags=%d", mode.value, len(names))

        if mode is TagMatchMode.AND:
            posts = await self.association_store.find_posts_with_all_tags(
                names, len(names)
            )
        else:
            posts = await self.association_store.find_posts_with_any_tag(names)
        return _unique_by_id(posts)


def _unique_by_id(posts: Iterable[PostResult]) -> list[PostResult]:
    """Drop repeated post ids and order by id ascending."""
    by_id: dict[str, PostResult] = {}
    for post in posts:
        by_id.setdefault(post.id, post)
    return [by_id[post_id] for post_id in sorted(by_id)]
