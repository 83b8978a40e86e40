"""Cursor scope resolution.

Finds which tables are visible from the SELECT the cursor sits in, without
building a parse tree. A single parenthesis depth counter stands in for
nesting: a token belongs to the cursor's scope exactly when the depth at that
token equals the depth recorded at the anchoring SELECT. This keeps
subquery tables from leaking into the outer query and the other way round.

Every step tolerates incomplete SQL. A missing SELECT or FROM means "no
scope", never an exception.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field

from sqlscope.sql import TERMINATORS, Keyword, Token, TokenKind, tokenize

from .cursor import Cursor

logger = logging.getLogger(__name__)

_TRAILING_WORD = re.compile(r"[A-Za-z0-9_]*$")


@dataclass
class Scope:
    """Tables visible from the cursor's SELECT.

    Attributes:
        tables: FROM-list identifiers in first-seen order, without duplicates.
        aliases: alias -> table name; the last mapping for an alias wins.
        prefix: Qualifier typed before the cursor (``u`` in ``u.``), if any.
    """

    tables: list[str] = field(default_factory=list)
    aliases: dict[str, str] = field(default_factory=dict)
    prefix: str | None = None

    @property
    def is_qualified(self) -> bool:
        return self.prefix is not None

    def resolve(self, name: str) -> str:
        """Map an alias to its table; anything else is taken as a table name."""
        return self.aliases.get(name, name)

    def target_tables(self) -> list[str]:
        """Tables whose columns should be suggested, in suggestion order."""
        if self.prefix is not None:
            return [self.resolve(self.prefix)]
        return list(self.tables)


def _depth_step(token: Token) -> int:
    if token.kind is TokenKind.PAREN_OPEN:
        return 1
    if token.kind is TokenKind.PAREN_CLOSE:
        return -1
    return 0


def locate_select(tokens: Sequence[Token], cursor_pos: int) -> tuple[int, int] | None:
    """Index and depth of the last SELECT that starts before ``cursor_pos``."""
    depth = 0
    last = None
    for index, token in enumerate(tokens):
        if token.start >= cursor_pos:
            break
        depth += _depth_step(token)
        if token.is_keyword(Keyword.SELECT):
            last = (index, depth)
    return last


def locate_from(tokens: Sequence[Token], select_index: int, select_depth: int) -> int | None:
    """Index of the first FROM after the SELECT at the SELECT's own depth.

    FROM clauses of deeper subqueries in the projection are skipped.
    """
    depth = select_depth
    for index in range(select_index + 1, len(tokens)):
        token = tokens[index]
        depth += _depth_step(token)
        if depth == select_depth and token.is_keyword(Keyword.FROM):
            return index
    return None


def extract_tables(
    tokens: Sequence[Token], from_index: int, select_depth: int
) -> tuple[list[str], dict[str, str]]:
    """Collect table names and aliases from the FROM list.

    Handles:
    - FROM a, b
    - FROM a JOIN b ON ...          (stops at the first ON)
    - FROM users u / FROM users AS u
    - FROM a WHERE ... / GROUP / ORDER / LIMIT / OFFSET / set operators

    Returns:
        (tables, aliases) where tables keeps first-seen order.
    """
    tables: list[str] = []
    aliases: dict[str, str] = {}
    depth = select_depth
    i = from_index + 1

    while i < len(tokens):
        token = tokens[i]

        if token.kind is TokenKind.PAREN_OPEN:
            depth += 1
            i += 1
            continue
        if token.kind is TokenKind.PAREN_CLOSE:
            depth -= 1
            if depth < select_depth:
                # The enclosing subquery closed; the FROM list ends with it.
                break
            i += 1
            continue

        if depth != select_depth:
            i += 1
            continue

        if token.kind is TokenKind.KEYWORD:
            if token.value in TERMINATORS:
                break
            i += 1
            continue

        name = token.ident
        if name is not None:
            if name not in tables:
                tables.append(name)

            following = tokens[i + 1] if i + 1 < len(tokens) else None
            if following is not None and following.is_keyword(Keyword.AS):
                alias = tokens[i + 2].ident if i + 2 < len(tokens) else None
                if alias is not None:
                    aliases[alias] = name
                    i += 3
                    continue
            elif following is not None and following.ident is not None:
                aliases[following.ident] = name
                i += 2
                continue

        # Commas and any other punctuation.
        i += 1

    return tables, aliases


def qualified_prefix(sql: str, select_end: int, cursor_pos: int) -> str | None:
    """Return ``alias`` when the text before the cursor ends in ``alias.``-style input.

    Only the region between the SELECT keyword and the cursor is examined, so
    dots before the SELECT (``1.0``, an earlier statement) never qualify.
    """
    if cursor_pos <= select_end:
        return None
    region = sql[select_end:cursor_pos]
    dot = region.rfind(".")
    if dot == -1:
        return None
    match = _TRAILING_WORD.search(region[:dot].rstrip())
    word = match.group() if match else ""
    return word or None


def resolve_scope(sql: str, cursor: Cursor, tokens: Sequence[Token] | None = None) -> Scope | None:
    """Resolve the scope visible at ``cursor``, or None if there is none."""
    if tokens is None:
        tokens = tokenize(sql)
    cursor_pos = cursor.start

    located = locate_select(tokens, cursor_pos)
    if located is None:
        logger.debug("no SELECT before cursor %d", cursor_pos)
        return None
    select_index, select_depth = located

    from_index = locate_from(tokens, select_index, select_depth)
    if from_index is None:
        logger.debug("SELECT at token %d (depth %d) has no FROM", select_index, select_depth)
        return None

    tables, aliases = extract_tables(tokens, from_index, select_depth)
    prefix = qualified_prefix(sql, tokens[select_index].end, cursor_pos)
    logger.debug(
        "scope at %d: select=%d from=%d depth=%d tables=%s aliases=%s prefix=%s",
        cursor_pos,
        select_index,
        from_index,
        select_depth,
        tables,
        aliases,
        prefix,
    )
    return Scope(tables=tables, aliases=aliases, prefix=prefix)
