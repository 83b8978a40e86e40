"""Assemble suggestions from a resolved scope and the catalog."""

from __future__ import annotations

import logging

from sqlscope.catalog import Database

from .cursor import Cursor
from .scope import resolve_scope
from .suggestion import Suggestion

logger = logging.getLogger(__name__)


def gather_columns(database: Database, table_name: str, out: list[Suggestion]) -> None:
    """Append column suggestions for every schema that has ``table_name``.

    Schemas are visited in catalog order and each table contributes its
    columns in declaration order. Unknown names contribute nothing.
    """
    for _schema_name, table in database.find_tables(table_name):
        for column in table.ordered_columns():
            out.append(Suggestion.column(column.name, column.data_type))


def search(sql: str, cursor: Cursor, database: Database) -> list[Suggestion]:
    """Column suggestions valid at ``cursor``.

    Qualified input (``alias.``) yields the columns of that one table, with
    aliases taking precedence over same-named tables. Otherwise every FROM-list
    table contributes, in FROM order. Results are not filtered or
    deduplicated; the presentation layer matches them against typed text.
    """
    scope = resolve_scope(sql, cursor)
    if scope is None:
        return []
    suggestions: list[Suggestion] = []
    for table_name in scope.target_tables():
        gather_columns(database, table_name, suggestions)
    logger.debug("%d suggestions for cursor %d", len(suggestions), cursor.start)
    return suggestions


def list_tables(database: Database) -> list[Suggestion]:
    """Every table in the catalog as a TABLE suggestion, schema by schema."""
    return [
        Suggestion.table(schema.name, table_name)
        for schema in database.schemas()
        for table_name in schema.table_names()
    ]


class CompletionEngine:
    """Autocomplete bound to one catalog.

    The catalog is owned by the caller and may be refreshed concurrently;
    each call reads whatever state the catalog holds at that moment.
    """

    def __init__(self, database: Database) -> None:
        self.database = database

    def suggest(self, sql: str, cursor: Cursor | int | None = None) -> list[Suggestion]:
        """Suggestions at ``cursor``.

        An int is a caret offset in characters (not bytes) into ``sql``; None
        means the end of the text.
        """
        if cursor is None:
            cursor = Cursor.at_end(sql)
        elif isinstance(cursor, int):
            cursor = Cursor(cursor)
        return search(sql, cursor, self.database)

    def tables(self) -> list[Suggestion]:
        return list_tables(self.database)
