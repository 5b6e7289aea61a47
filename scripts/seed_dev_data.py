"""Seed dev data from scripts/seed-data.json into Postgres.

Creates tags by name (reused if they exist), inserts each post, and attaches
its tags through PostRepository.attach_tag (idempotent).

Usage:
    uv run python -m scripts.seed_dev_data [path/to/seed-data.json]

Default path: scripts/seed-data.json (relative to project root).
Requires: DATABASE_URL (postgresql+asyncpg), schema at head
(uv run alembic upgrade head). Posts are inserted on every run; seed an
empty database.
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

from app.core.config import get_settings
from app.infrastructure.persistence import database as db_mod
from app.infrastructure.persistence.repositories import PostRepository, TagRepository


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


def _load_env() -> None:
    """Load .env from project root so get_settings() sees DATABASE_URL when run as script."""
    load_dotenv(_project_root() / ".env", override=True)
    get_settings.cache_clear()


async def run(path: Path) -> None:
    _load_env()
    if not path.exists():
        print(f"Seed file not found: {path}", file=sys.stderr)
        sys.exit(1)
    with path.open() as f:
        data = json.load(f)
    posts_data = data.get("posts", [])

    db_mod._ensure_engine()
    if db_mod.AsyncSessionLocal is None:
        print(
            "AsyncSessionLocal not configured. Set DATABASE_URL and run: uv run alembic upgrade head",
            file=sys.stderr,
        )
        sys.exit(1)

    async with db_mod.AsyncSessionLocal() as session:
        async with session.begin():
            post_repo = PostRepository(session)
            tag_repo = TagRepository(session)
            for item in posts_data:
                post = await post_repo.create_post(
                    store_name=item["store_name"],
                    body=item.get("body"),
                    rating=item.get("rating"),
                    address=item.get("address"),
                )
                for name in item.get("tags", []):
                    tag = await tag_repo.get_or_create(name)
                    await post_repo.attach_tag(post.id, tag.id)
                print(f"  Post {post.id}: {item['store_name']} {sorted(item.get('tags', []))}")

    await db_mod.engine.dispose()
    print(f"Seed completed: {len(posts_data)} posts.")


def main() -> None:
    root = _project_root()
    path_arg = sys.argv[1] if len(sys.argv) > 1 else None
    path = Path(path_arg) if path_arg else root / "scripts" / "seed-data.json"
    if not path.is_absolute():
        path = (root / path).resolve()
    asyncio.run(run(path))


if __name__ == "__main__":
    main()
