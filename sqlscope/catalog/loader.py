"""Build catalogs from JSON documents or a live SQLite connection.

The JSON document shape is::

    {
        "name": "postgres",
        "schemas": {
            "public": {
                "users": [["id", "uuid"], ["email", "text"]]
            }
        }
    }

Schema, table and column order in the document is preserved.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from pathlib import Path
from typing import Any

from sqlscope.errors import CatalogError
from sqlscope.store import JSONFileStore

from .datatype import DataType
from .model import Database, Schema, Table

logger = logging.getLogger(__name__)

SQLITE_SCHEMA = "main"


def database_from_dict(data: Any) -> Database:
    """Build a Database from a parsed catalog document."""
    if not isinstance(data, dict):
        raise CatalogError("catalog document must be a JSON object")
    schemas = data.get("schemas", {})
    if not isinstance(schemas, dict):
        raise CatalogError("'schemas' must map schema names to tables")

    database = Database(str(data.get("name", "default")))
    for schema_name, tables in schemas.items():
        if not isinstance(tables, dict):
            raise CatalogError(f"schema {schema_name!r} must map table names to column lists")
        built = [_table_from_entry(schema_name, table_name, columns) for table_name, columns in tables.items()]
        database.insert_schema(Schema(schema_name, built))
    return database


def _table_from_entry(schema_name: str, table_name: str, columns: Any) -> Table:
    if not isinstance(columns, list):
        raise CatalogError(f"table {schema_name}.{table_name} must be a list of [name, type] pairs")
    pairs = []
    for entry in columns:
        if not isinstance(entry, (list, tuple)) or len(entry) != 2:
            raise CatalogError(f"bad column entry in {schema_name}.{table_name}: {entry!r}")
        pairs.append((str(entry[0]), DataType.parse(str(entry[1]))))
    return Table.from_pairs(table_name, pairs)


def database_to_dict(database: Database) -> dict[str, Any]:
    """Serialize a Database into the catalog document shape."""
    return {
        "name": database.name,
        "schemas": {
            schema.name: {
                table.name: [[column.name, str(column.data_type)] for column in table.ordered_columns()]
                for table in schema.tables()
            }
            for schema in database.schemas()
        },
    }


class CatalogStore(JSONFileStore):
    """A catalog document file.

    Unlike settings, a catalog the user pointed at must exist and parse, so
    reads raise CatalogError instead of falling back to an empty catalog.
    """

    private = False

    def __init__(self, file_path: str | Path) -> None:
        super().__init__(Path(file_path).expanduser())

    def load(self) -> Database:
        try:
            data = self._load()
        except FileNotFoundError as exc:
            raise CatalogError(f"catalog file not found: {self.file_path}") from exc
        except json.JSONDecodeError as exc:
            raise CatalogError(f"catalog file is not valid JSON: {self.file_path}: {exc}") from exc
        database = database_from_dict(data)
        logger.debug("loaded catalog %s from %s", database.name, self.file_path)
        return database

    def save(self, database: Database) -> None:
        self._write_json(database_to_dict(database))
        logger.debug("saved catalog %s to %s", database.name, self.file_path)


def load_catalog_file(path: str | Path) -> Database:
    """Read a JSON catalog document from disk."""
    return CatalogStore(path).load()


def save_catalog_file(database: Database, path: str | Path) -> None:
    """Write ``database`` as a JSON catalog document, replacing the file atomically."""
    CatalogStore(path).save(database)


def quote_identifier(name: str) -> str:
    """Quote identifier using double quotes for SQLite."""
    escaped = name.replace('"', '""')
    return f'"{escaped}"'


def load_sqlite_catalog(conn: Any, name: str = "sqlite") -> Database:
    """Introspect a SQLite connection into a Database with a single ``main`` schema.

    Tables and views are both included, ordered by name; columns keep their
    declared order.
    """
    cursor = conn.cursor()
    cursor.execute(
        "SELECT name FROM sqlite_master WHERE type IN ('table', 'view') "
        "AND name NOT LIKE 'sqlite_%' ORDER BY name"
    )
    table_names = [row[0] for row in cursor.fetchall()]

    tables = []
    for table_name in table_names:
        cursor.execute(f"PRAGMA table_info({quote_identifier(table_name)})")
        # PRAGMA table_info returns: cid, name, type, notnull, dflt_value, pk
        columns = [(row[1], DataType.parse(row[2] or "")) for row in cursor.fetchall()]
        tables.append(Table.from_pairs(table_name, columns))

    database = Database(name)
    database.insert_schema(Schema(SQLITE_SCHEMA, tables))
    logger.debug("introspected %d sqlite tables into catalog %s", len(tables), name)
    return database


def load_sqlite_file(file_path: str | Path, name: str | None = None) -> Database:
    """Open a SQLite database file read-only and introspect it."""
    path = Path(file_path).expanduser()
    if not path.exists():
        raise CatalogError(f"database file not found: {path}")
    conn = sqlite3.connect(f"file:{path}?mode=ro", uri=True)
    try:
        return load_sqlite_catalog(conn, name or path.stem)
    finally:
        conn.close()
