"""Tokens produced by the lenient tokenizer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from .keyword import Keyword


class TokenKind(Enum):
    """Classification of a lexical atom."""

    IDENTIFIER = auto()
    KEYWORD = auto()
    COMMA = auto()
    DOT = auto()
    PAREN_OPEN = auto()
    PAREN_CLOSE = auto()
    OTHER = auto()  # Any other single character; ignored by the resolver


PUNCTUATION = frozenset({TokenKind.COMMA, TokenKind.DOT, TokenKind.PAREN_OPEN, TokenKind.PAREN_CLOSE})


@dataclass(frozen=True)
class Token:
    """A token with its ``[start, end)`` character span in the source SQL.

    ``value`` is the identifier text (as typed) for identifiers, the
    Keyword member for keywords and the raw character otherwise.
    """

    kind: TokenKind
    start: int
    end: int
    value: str | Keyword

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def span(self) -> tuple[int, int]:
        return (self.start, self.end)

    @property
    def ident(self) -> str | None:
        """Identifier text, or None if this is not an identifier."""
        if self.kind is TokenKind.IDENTIFIER:
            return self.value  # type: ignore[return-value]
        return None

    @property
    def is_punctuation(self) -> bool:
        return self.kind in PUNCTUATION

    def is_keyword(self, keyword: Keyword) -> bool:
        return self.kind is TokenKind.KEYWORD and self.value is keyword

    def contains(self, offset: int) -> bool:
        """True if ``offset`` lies inside the span (end exclusive)."""
        return self.start <= offset < self.end
