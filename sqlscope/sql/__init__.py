"""Lightweight SQL tokenization for cursor-aware completion.

This is not a SQL parser: it keeps just enough structure (identifiers, a
handful of keywords, commas, dots, parentheses) for the scope resolver.
"""

from .keyword import TERMINATORS, Keyword
from .token import Token, TokenKind
from .tokenizer import tokenize

__all__ = [
    "Keyword",
    "TERMINATORS",
    "Token",
    "TokenKind",
    "tokenize",
]
