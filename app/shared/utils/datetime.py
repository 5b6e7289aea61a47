"""
UTC datetime utilities for consistent timezone handling.

All datetime values leaving the persistence layer are timezone-aware UTC.
"""

from datetime import UTC, datetime


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone (e.g. SQLite drivers)
    - If aware, converts to UTC

    Use at repository boundaries when mapping ORM rows to DTOs.

    Args:
        dt: A datetime that may be naive or aware

    Returns:
        UTC-aware datetime or None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)
