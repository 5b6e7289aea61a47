"""Post and tag search dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.use_cases.search import TagSearchService
from app.core.config import get_settings
from app.infrastructure.persistence.database import get_db
from app.infrastructure.persistence.repositories import PostRepository


async def get_post_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PostRepository:
    """Post repository (tag association store, read-only session)."""
    return PostRepository(db)


async def get_tag_search_service(
    post_repo: Annotated[PostRepository, Depends(get_post_repo)],
) -> TagSearchService:
    """Tag search use case (OR / AND over the association store)."""
    return TagSearchService(
        post_repo, strict_mode=get_settings().tag_search_strict_mode
    )
