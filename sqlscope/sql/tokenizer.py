"""Lenient single-pass SQL tokenizer.

Accepts incomplete or invalid SQL (``SELECT FROM``, ``JOIN , t``) and never
raises. Runs of ``[A-Za-z0-9_]`` become identifiers or keywords; comma, dot
and parentheses get their own kinds; every other non-whitespace character is
an OTHER token.
"""

from __future__ import annotations

import re

from .keyword import Keyword
from .token import Token, TokenKind

# Word runs, or any single character that is not ASCII whitespace.
_LEXEME = re.compile(r"[A-Za-z0-9_]+|[^ \t\n\r\f]")

_PUNCTUATION = {
    ",": TokenKind.COMMA,
    ".": TokenKind.DOT,
    "(": TokenKind.PAREN_OPEN,
    ")": TokenKind.PAREN_CLOSE,
}


def _is_word_char(char: str) -> bool:
    return char == "_" or (char.isascii() and char.isalnum())


def tokenize(sql: str) -> list[Token]:
    """Split ``sql`` into tokens.

    Spans are ``str`` indices (code points), not UTF-8 byte offsets, so
    ``sql[token.start:token.end]`` is always the token text.
    """
    tokens: list[Token] = []
    for match in _LEXEME.finditer(sql):
        text = match.group()
        start, end = match.span()
        if _is_word_char(text[0]):
            keyword = Keyword.from_lower(text.lower())
            if keyword is not None:
                tokens.append(Token(TokenKind.KEYWORD, start, end, keyword))
            else:
                tokens.append(Token(TokenKind.IDENTIFIER, start, end, text))
        else:
            tokens.append(Token(_PUNCTUATION.get(text, TokenKind.OTHER), start, end, text))
    return tokens
