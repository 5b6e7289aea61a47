"""Pytest configuration and fixtures for post tag search.

Uses app.main:app for HTTP tests and app.infrastructure.persistence.database
for DB-dependent fixtures. All imports use app.*.
"""

from collections.abc import Iterable
from datetime import datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.dependencies import get_tag_search_service
from app.application.dtos.post import PostResult
from app.application.use_cases.search import TagSearchService
from app.infrastructure.persistence import database as db_mod
from app.main import app


def make_post(
    post_id: str,
    tag_names: Iterable[str] = (),
    store_name: str | None = None,
) -> PostResult:
    """Build a PostResult for tests; store_name defaults to 'Store <id>'."""
    now = datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc)
    return PostResult(
        id=post_id,
        store_name=store_name or f"Store {post_id}",
        body=None,
        rating=None,
        address=None,
        tag_names=frozenset(tag_names),
        created_at=now,
        updated_at=now,
    )


class InMemoryTagStore:
    """ITagAssociationStore over a fixed list of posts. Records each call."""

    def __init__(self, posts: Iterable[PostResult]) -> None:
        self.posts = list(posts)
        self.calls: list[tuple[str, frozenset[str], int | None]] = []

    async def find_posts_with_any_tag(self, tag_names: set[str]) -> list[PostResult]:
        self.calls.append(("any", frozenset(tag_names), None))
        return [p for p in self.posts if p.tag_names & tag_names]

    async def find_posts_with_all_tags(
        self, tag_names: set[str], required_count: int
    ) -> list[PostResult]:
        self.calls.append(("all", frozenset(tag_names), required_count))
        return [p for p in self.posts if len(p.tag_names & tag_names) == required_count]


@pytest.fixture
def scenario_posts() -> list[PostResult]:
    """P1 {dating, gangnam}, P2 {dating}, P3 {gangnam, cafe}."""
    return [
        make_post("P1", {"dating", "gangnam"}),
        make_post("P2", {"dating"}),
        make_post("P3", {"gangnam", "cafe"}),
    ]


@pytest.fixture
def scenario_store(scenario_posts: list[PostResult]) -> InMemoryTagStore:
    return InMemoryTagStore(scenario_posts)


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def override_search_store():
    """Install a TagSearchService over the given store for API tests; undone after test.

    Call with the store (and optional strict_mode) inside the test.
    """

    def _install(store, strict_mode: bool = False) -> None:
        app.dependency_overrides[get_tag_search_service] = lambda: TagSearchService(
            store, strict_mode=strict_mode
        )

    yield _install
    app.dependency_overrides.pop(get_tag_search_service, None)


@pytest.fixture
async def db_session() -> AsyncSession:
    """Database session for repository/integration tests. Rolls back after test.

    Requires DATABASE_URL (postgresql+asyncpg) with the schema at head. Skips
    (pytest.skip) when Postgres is not configured. Use @pytest.mark.requires_db
    to mark tests that need this fixture; run without DB via:
    pytest -m 'not requires_db'.
    """
    db_mod._ensure_engine()
    if db_mod.AsyncSessionLocal is None:
        pytest.skip(
            "Postgres not configured: set DATABASE_URL, "
            "then run: uv run alembic upgrade head"
        )
    async with db_mod.AsyncSessionLocal() as session:
        yield session
        await session.rollback()
