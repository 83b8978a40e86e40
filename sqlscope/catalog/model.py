"""In-memory catalog: Database owns Schemas, Schema owns Tables, Table owns Columns.

Every level guards its own map with a ReadWriteLock, so refreshing one table
never blocks lookups in an unrelated schema. Lookups are exact-match and
case-sensitive. New tables and schemas are fully built before they are
published into their parent map.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from .datatype import DataType
from .locks import ReadWriteLock

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Column:
    """A table column."""

    name: str
    data_type: DataType


class Table:
    """A table and its columns in declaration order."""

    def __init__(self, name: str, columns: Iterable[Column] = ()) -> None:
        self.name = name
        self._lock = ReadWriteLock()
        self._columns: dict[str, Column] = {}
        # Declaration order, independent of the lookup map.
        self._order: list[str] = []
        for column in columns:
            if column.name not in self._columns:
                self._order.append(column.name)
            self._columns[column.name] = column

    @classmethod
    def from_pairs(cls, name: str, columns: Iterable[tuple[str, DataType | str]]) -> Table:
        """Build a table from ``(column_name, data_type)`` pairs, keeping their order."""
        built = []
        for column_name, data_type in columns:
            if isinstance(data_type, str):
                data_type = DataType.parse(data_type)
            built.append(Column(column_name, data_type))
        return cls(name, built)

    def __repr__(self) -> str:
        return f"Table({self.name!r}, columns={self.column_names!r})"

    @property
    def column_names(self) -> list[str]:
        with self._lock.read():
            return list(self._order)

    def get_column(self, name: str) -> Column | None:
        with self._lock.read():
            return self._columns.get(name)

    def ordered_columns(self) -> list[Column]:
        """Columns in the order the table was declared with."""
        with self._lock.read():
            return [self._columns[name] for name in self._order]

    def upsert_column(self, column: Column) -> None:
        """Insert or replace a column. Replacing keeps the column's position."""
        with self._lock.write():
            if column.name not in self._columns:
                self._order.append(column.name)
            self._columns[column.name] = column


class Schema:
    """A named collection of tables."""

    def __init__(self, name: str, tables: Iterable[Table] = ()) -> None:
        self.name = name
        self._lock = ReadWriteLock()
        self._tables: dict[str, Table] = {table.name: table for table in tables}

    def __repr__(self) -> str:
        return f"Schema({self.name!r}, tables={self.table_names()!r})"

    def get_table(self, name: str) -> Table | None:
        with self._lock.read():
            return self._tables.get(name)

    def tables(self) -> list[Table]:
        with self._lock.read():
            return list(self._tables.values())

    def table_names(self) -> list[str]:
        with self._lock.read():
            return list(self._tables)

    def upsert_table(self, table: Table) -> None:
        """Insert a table, replacing any table with the same name."""
        with self._lock.write():
            self._tables[table.name] = table

    def setdefault_table(self, table: Table) -> Table | None:
        """Publish ``table`` unless one with its name exists.

        Returns the existing table, or None if ``table`` was the one stored.
        """
        with self._lock.write():
            existing = self._tables.get(table.name)
            if existing is None:
                self._tables[table.name] = table
            return existing


class Database:
    """Root of the catalog for one database.

    Schemas iterate in the order they were first inserted; that order drives
    the order of suggestions when a table name exists in several schemas.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._lock = ReadWriteLock()
        self._schemas: dict[str, Schema] = {}

    def __repr__(self) -> str:
        return f"Database({self.name!r}, schemas={self.schema_names()!r})"

    def get_schema(self, name: str) -> Schema | None:
        with self._lock.read():
            return self._schemas.get(name)

    def schemas(self) -> list[Schema]:
        with self._lock.read():
            return list(self._schemas.values())

    def schema_names(self) -> list[str]:
        with self._lock.read():
            return list(self._schemas)

    def insert_schema(self, schema: Schema) -> None:
        """Insert or replace a whole schema."""
        with self._lock.write():
            self._schemas[schema.name] = schema
        logger.debug("catalog %s: schema %s stored", self.name, schema.name)

    def insert_table(self, schema_name: str, table: Table) -> None:
        """Insert or replace a table, creating the schema if needed."""
        schema = self._get_or_create_schema(schema_name, table)
        if schema is not None:
            schema.upsert_table(table)
        logger.debug("catalog %s: table %s.%s stored", self.name, schema_name, table.name)

    def insert_column(self, schema_name: str, table_name: str, column: Column) -> None:
        """Insert or replace a column, creating the schema and table if needed."""
        schema = self._get_or_create_schema(schema_name, Table(table_name, [column]))
        if schema is None:
            return
        table = schema.get_table(table_name) or schema.setdefault_table(Table(table_name, [column]))
        if table is not None:
            table.upsert_column(column)
        logger.debug("catalog %s: column %s.%s.%s stored", self.name, schema_name, table_name, column.name)

    def find_tables(self, table_name: str) -> list[tuple[str, Table]]:
        """Every ``(schema_name, table)`` with this exact table name, in schema order."""
        found = []
        for schema in self.schemas():
            table = schema.get_table(table_name)
            if table is not None:
                found.append((schema.name, table))
        return found

    def _get_or_create_schema(self, schema_name: str, first_table: Table) -> Schema | None:
        """Return the existing schema, or publish a new one holding ``first_table``.

        Returns None when a new schema was created, since it already holds
        ``first_table`` and the caller has nothing left to insert.
        """
        schema = self.get_schema(schema_name)
        if schema is not None:
            return schema
        with self._lock.write():
            schema = self._schemas.get(schema_name)
            if schema is None:
                self._schemas[schema_name] = Schema(schema_name, [first_table])
                return None
        return schema
