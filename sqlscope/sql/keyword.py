"""The small keyword set the scope resolver needs.

Only words that change how a FROM list is read are classified; everything
else stays an identifier so incomplete SQL still tokenizes cleanly.
"""

from __future__ import annotations

from enum import Enum


class Keyword(Enum):
    """Recognized SQL keywords, valued by their lower-case spelling."""

    SELECT = "select"
    FROM = "from"
    JOIN = "join"
    ON = "on"
    AS = "as"
    WHERE = "where"
    GROUP = "group"
    ORDER = "order"
    LIMIT = "limit"
    OFFSET = "offset"
    UNION = "union"
    EXCEPT = "except"
    INTERSECT = "intersect"

    @classmethod
    def from_lower(cls, word: str) -> Keyword | None:
        """Classify an already lower-cased word, or return None."""
        return cls._value2member_map_.get(word)  # type: ignore[return-value]

    def __str__(self) -> str:
        return self.value


# Keywords that close a FROM list when seen at the SELECT's own depth.
TERMINATORS = frozenset(
    {
        Keyword.WHERE,
        Keyword.GROUP,
        Keyword.ORDER,
        Keyword.LIMIT,
        Keyword.OFFSET,
        Keyword.UNION,
        Keyword.EXCEPT,
        Keyword.INTERSECT,
        Keyword.ON,
    }
)
