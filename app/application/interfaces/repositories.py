"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.application.dtos.post import PostResult


# Tag association store interface
class ITagAssociationStore(Protocol):
    """Protocol for the post-tag association store (read side used by search).

    Implementations must return each post at most once, ordered by post id
    ascending, and must raise TagStoreUnavailableException (never return an
    empty list) when the backing store cannot be reached.
    """

    async def find_posts_with_any_tag(self, tag_names: set[str]) -> list[PostResult]:
        """Return posts with at least one association whose tag name is in tag_names."""

    async def find_posts_with_all_tags(
        self, tag_names: set[str], required_count: int
    ) -> list[PostResult]:
        """Return posts whose associations restricted to tag_names number exactly required_count distinct tags."""
