"""Pytest fixtures for sqlscope tests."""

from __future__ import annotations

import os
import sqlite3
import tempfile
from collections.abc import Callable
from pathlib import Path

import pytest

_TEST_CONFIG_DIR = Path(tempfile.mkdtemp(prefix="sqlscope-test-config-"))
os.environ.setdefault("SQLSCOPE_CONFIG_DIR", str(_TEST_CONFIG_DIR))

from sqlscope.catalog import DataType, Database, Table  # noqa: E402

TableDef = tuple[str, list[tuple[str, DataType]]]


def build_database(
    tables: list[TableDef],
    schema: str = "public",
    name: str = "postgres",
    database: Database | None = None,
) -> Database:
    """Build (or extend) a Database with the given tables in one schema."""
    database = database or Database(name)
    for table_name, columns in tables:
        database.insert_table(schema, Table.from_pairs(table_name, columns))
    return database


@pytest.fixture
def make_database() -> Callable[..., Database]:
    """Factory fixture building an in-memory catalog from (table, columns) pairs."""
    return build_database


@pytest.fixture(scope="function")
def sqlite_db_path(tmp_path: Path) -> Path:
    """Create a temporary SQLite database file path."""
    return tmp_path / "test_database.db"


@pytest.fixture(scope="function")
def sqlite_db(sqlite_db_path: Path) -> Path:
    """Create a temporary SQLite database with test tables and a view."""
    conn = sqlite3.connect(sqlite_db_path)
    cursor = conn.cursor()

    cursor.execute("""
        CREATE TABLE test_users (
            id INTEGER PRIMARY KEY,
            name TEXT NOT NULL,
            email VARCHAR(255) UNIQUE
        )
    """)

    cursor.execute("""
        CREATE TABLE test_products (
            id INTEGER PRIMARY KEY,
            name TEXT NOT NULL,
            price NUMERIC(10, 2) NOT NULL,
            stock INTEGER DEFAULT 0
        )
    """)

    cursor.execute("""
        CREATE VIEW test_user_emails AS
        SELECT id, name, email FROM test_users WHERE email IS NOT NULL
    """)

    cursor.executemany(
        "INSERT INTO test_users (id, name, email) VALUES (?, ?, ?)",
        [
            (1, "Alice", "alice@example.com"),
            (2, "Bob", "bob@example.com"),
        ],
    )

    conn.commit()
    conn.close()

    return sqlite_db_path
