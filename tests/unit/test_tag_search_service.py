"""TagSearchService unit tests against an in-memory association store."""

from unittest.mock import AsyncMock

import pytest

from app.application.use_cases.search import TagSearchService, normalize_tag_names
from app.domain.enums import TagMatchMode
from app.domain.exceptions import TagStoreUnavailableException, ValidationException
from tests.conftest import InMemoryTagStore, make_post


def _ids(posts) -> list[str]:
    return [p.id for p in posts]


async def test_or_returns_posts_with_any_tag(scenario_store: InMemoryTagStore) -> None:
    """OR over {dating, gangnam} matches every post carrying either tag."""
    svc = TagSearchService(scenario_store)
    posts = await svc.search(["dating", "gangnam"], "OR")
    assert _ids(posts) == ["P1", "P2", "P3"]


async def test_and_returns_posts_with_all_tags(scenario_store: InMemoryTagStore) -> None:
    """AND over {dating, gangnam} matches only the post carrying both."""
    svc = TagSearchService(scenario_store)
    posts = await svc.search(["dating", "gangnam"], "AND")
    assert _ids(posts) == ["P1"]


async def test_single_tag_or_and_and_agree(scenario_store: InMemoryTagStore) -> None:
    """With one tag, OR and AND select the same posts."""
    svc = TagSearchService(scenario_store)
    assert _ids(await svc.search(["cafe"], "OR")) == ["P3"]
    assert _ids(await svc.search(["cafe"], "AND")) == ["P3"]


async def test_unknown_tag_never_matches(scenario_store: InMemoryTagStore) -> None:
    """A tag no post carries yields nothing under OR and blocks AND."""
    svc = TagSearchService(scenario_store)
    assert await svc.search(["nonexistent"], "OR") == []
    assert await svc.search(["dating", "nonexistent"], "AND") == []
    assert _ids(await svc.search(["dating", "nonexistent"], "OR")) == ["P1", "P2"]


async def test_duplicate_names_count_once_for_and(scenario_store: InMemoryTagStore) -> None:
    """["dating", "dating"] under AND behaves like ["dating"]."""
    svc = TagSearchService(scenario_store)
    posts = await svc.search(["dating", "dating"], "AND")
    assert _ids(posts) == ["P1", "P2"]
    assert scenario_store.calls[-1] == ("all", frozenset({"dating"}), 1)


@pytest.mark.parametrize("condition", ["and", "And", "AND"])
async def test_and_is_case_insensitive(
    scenario_store: InMemoryTagStore, condition: str
) -> None:
    svc = TagSearchService(scenario_store)
    assert _ids(await svc.search(["dating", "gangnam"], condition)) == ["P1"]


@pytest.mark.parametrize("condition", [None, "", "or", "XOR", "both"])
async def test_other_conditions_fall_back_to_or(
    scenario_store: InMemoryTagStore, condition: str | None
) -> None:
    """Anything but AND selects OR when strict mode is off."""
    svc = TagSearchService(scenario_store)
    posts = await svc.search(["dating", "gangnam"], condition)
    assert _ids(posts) == ["P1", "P2", "P3"]
    assert scenario_store.calls[-1][0] == "any"


async def test_strict_mode_rejects_unknown_condition(
    scenario_store: InMemoryTagStore,
) -> None:
    """Strict mode raises ValidationException for an unrecognized condition."""
    svc = TagSearchService(scenario_store, strict_mode=True)
    with pytest.raises(ValidationException) as exc_info:
        await svc.search(["dating"], "XOR")
    assert exc_info.value.details == {"field": "condition"}
    assert scenario_store.calls == []


async def test_strict_mode_accepts_known_conditions(
    scenario_store: InMemoryTagStore,
) -> None:
    svc = TagSearchService(scenario_store, strict_mode=True)
    assert _ids(await svc.search(["dating"], "or")) == ["P1", "P2"]
    assert _ids(await svc.search(["dating", "gangnam"], "and")) == ["P1"]


@pytest.mark.parametrize("tags", [None, [], ["", "  "]])
async def test_empty_tags_return_empty_without_store_access(tags) -> None:
    """No usable tag names: [] and the store is never called."""
    store = AsyncMock()
    svc = TagSearchService(store, strict_mode=True)
    assert await svc.search(tags, "XOR") == []
    store.find_posts_with_any_tag.assert_not_called()
    store.find_posts_with_all_tags.assert_not_called()


async def test_names_are_stripped_before_matching(
    scenario_store: InMemoryTagStore,
) -> None:
    svc = TagSearchService(scenario_store)
    assert _ids(await svc.search([" cafe "], "OR")) == ["P3"]


async def test_names_are_case_sensitive(scenario_store: InMemoryTagStore) -> None:
    svc = TagSearchService(scenario_store)
    assert await svc.search(["Cafe"], "OR") == []


async def test_store_duplicates_are_dropped_and_sorted() -> None:
    """Repeated or unordered store rows come back once each, by id ascending."""
    p1 = make_post("P1", {"a"})
    p2 = make_post("P2", {"a"})
    store = AsyncMock()
    store.find_posts_with_any_tag = AsyncMock(return_value=[p2, p1, p2])
    svc = TagSearchService(store)
    posts = await svc.search(["a"], "OR")
    assert posts == [p1, p2]


async def test_and_passes_distinct_count_to_store() -> None:
    store = AsyncMock()
    store.find_posts_with_all_tags = AsyncMock(return_value=[])
    svc = TagSearchService(store)
    await svc.search(["x", "y", "x", " y"], "AND")
    store.find_posts_with_all_tags.assert_awaited_once_with({"x", "y"}, 2)


async def test_store_failure_propagates() -> None:
    """A store outage is raised, never turned into an empty result."""
    store = AsyncMock()
    store.find_posts_with_any_tag = AsyncMock(
        side_effect=TagStoreUnavailableException("find_posts_with_any_tag")
    )
    svc = TagSearchService(store)
    with pytest.raises(TagStoreUnavailableException):
        await svc.search(["dating"], "OR")


async def test_repeated_searches_read_store_each_time(
    scenario_store: InMemoryTagStore,
) -> None:
    """No caching: a store change is visible on the next call."""
    svc = TagSearchService(scenario_store)
    assert _ids(await svc.search(["new"], "OR")) == []
    scenario_store.posts.append(make_post("P4", {"new"}))
    assert _ids(await svc.search(["new"], "OR")) == ["P4"]


def test_resolve_mode() -> None:
    svc = TagSearchService(AsyncMock())
    assert svc.resolve_mode("AND") is TagMatchMode.AND
    assert svc.resolve_mode("garbage") is TagMatchMode.OR
    assert svc.resolve_mode(None) is TagMatchMode.OR


def test_normalize_tag_names() -> None:
    assert normalize_tag_names(None) == set()
    assert normalize_tag_names([" a", "a ", "", None, "B"]) == {"a", "B"}
