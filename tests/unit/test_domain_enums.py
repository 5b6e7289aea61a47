"""Tests for domain enums (TagMatchMode parsing)."""

import pytest

from app.domain.enums import TagMatchMode


def test_tag_match_mode_values() -> None:
    assert TagMatchMode.values() == ["AND", "OR"]


@pytest.mark.parametrize("raw", ["AND", "and", "aNd"])
def test_parse_and(raw: str) -> None:
    assert TagMatchMode.parse(raw) is TagMatchMode.AND


@pytest.mark.parametrize("raw", [None, "", "OR", "or", "XOR", " AND", "ANDOR"])
def test_parse_everything_else_is_or(raw: str | None) -> None:
    """Only an exact case-insensitive AND selects AND."""
    assert TagMatchMode.parse(raw) is TagMatchMode.OR


def test_is_known() -> None:
    assert TagMatchMode.is_known("or")
    assert TagMatchMode.is_known("AND")
    assert not TagMatchMode.is_known("XOR")
    assert not TagMatchMode.is_known("")
    assert not TagMatchMode.is_known(None)


def test_tag_match_mode_is_str() -> None:
    """Mode compares equal to its string value."""
    assert TagMatchMode.AND == "AND"
