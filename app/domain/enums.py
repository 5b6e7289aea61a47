"""Domain enumerations for post tag search.

Enums represent fixed sets of domain values (e.g. tag match mode).
"""

from enum import Enum


class TagMatchMode(str, Enum):
    """How a requested tag set is matched against a post's tags.

    OR selects posts carrying at least one requested tag; AND selects posts
    carrying every requested tag.
    """

    AND = "AND"
    OR = "OR"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid mode values as strings."""
        return [mode.value for mode in cls]

    @classmethod
    def is_known(cls, raw: str | None) -> bool:
        """Return True if raw is a case-insensitive match of a mode value."""
        return raw is not None and raw.upper() in cls.values()

    @classmethod
    def parse(cls, raw: str | None) -> "TagMatchMode":
        """Map a client-supplied condition to a mode.

        Only a case-insensitive "AND" selects AND. Anything else, including
        None, empty and unrecognized strings, selects OR.
        """
        if raw is not None and raw.upper() == cls.AND.value:
            return cls.AND
        return cls.OR
