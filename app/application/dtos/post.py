"""DTOs for post and tag read-models (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class TagResult:
    """Tag read-model (result of get_by_name, get_by_names, get_or_create)."""

    id: str
    name: str


@dataclass(frozen=True)
class PostResult:
    """Post read-model returned by the tag association store and search use case."""

    id: str
    store_name: str
    body: str | None
    rating: int | None
    address: str | None
    tag_names: frozenset[str]
    created_at: datetime
    updated_at: datetime
