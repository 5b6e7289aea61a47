"""Posts API: search posts by tag set (ANY-of / ALL-of)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from app.api.v1.dependencies import get_tag_search_service
from app.application.use_cases.search import TagSearchService
from app.core.limiter import limit_search
from app.schemas.post import PostResponse

router = APIRouter()


def parse_tag_list(raw: list[str] | None) -> list[str]:
    """Split comma-delimited tag parameters into names (blank entries dropped).

    Accepts both ?tags=a,b and ?tags=a&tags=b.
    """
    if not raw:
        return []
    return [part.strip() for value in raw for part in value.split(",") if part.strip()]


@router.get("/search", response_model=list[PostResponse])
@limit_search
async def search_posts(
    request: Request,
    search_svc: Annotated[TagSearchService, Depends(get_tag_search_service)],
    tags: Annotated[
        list[str] | None,
        Query(description="Tag names, comma-delimited or repeated"),
    ] = None,
    condition: Annotated[
        str,
        Query(description="AND (all tags) or OR (any tag); anything else is OR"),
    ] = "OR",
) -> list[PostResponse]:
    """Return posts carrying any (OR) or all (AND) of the given tags, ordered by id.

    No tags yields an empty list. Unknown conditions fall back to OR unless
    strict mode is enabled.
    """
    posts = await search_svc.search(parse_tag_list(tags), condition)
    return [PostResponse.from_result(p) for p in posts]
