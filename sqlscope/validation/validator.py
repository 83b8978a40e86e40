"""Full validation of finished statements against a live backend.

This is separate from autocomplete: the completion engine never calls it and
never depends on it succeeding. Statements are prepared inside a savepoint
that is always rolled back, so validation has no lasting side effects.
"""

from __future__ import annotations

import logging
import re
import sqlite3
from pathlib import Path
from typing import Any

import sqlparse

from sqlscope.errors import SqlscopeError, ValidationError

logger = logging.getLogger(__name__)

_SAVEPOINT = "sqlscope_validate"
_NEAR_TOKEN = re.compile(r'near "((?:[^"]|"")*)"')
_UNRECOGNIZED_TOKEN = re.compile(r'unrecognized token: "((?:[^"]|"")*)"')
_NO_SUCH_COLUMN = re.compile(r"no such column: ([\w.]+)")


def _error_position(sql: str, message: str) -> int | None:
    """Best-effort 1-based position of the token a SQLite message points at."""
    if "incomplete input" in message:
        return len(sql.rstrip()) + 1
    for pattern in (_NEAR_TOKEN, _UNRECOGNIZED_TOKEN, _NO_SUCH_COLUMN):
        match = pattern.search(message)
        if match:
            offset = sql.find(match.group(1).replace('""', '"'))
            return offset + 1 if offset != -1 else None
    return None


class Validator:
    """Validates statements against a DB-API connection (SQLite)."""

    def __init__(self, conn: Any) -> None:
        self.conn = conn

    @classmethod
    def for_file(cls, file_path: str | Path) -> Validator:
        path = Path(file_path).expanduser()
        if not path.exists():
            raise SqlscopeError(f"database file not found: {path}")
        # check_same_thread=False allows the validator to run from a worker thread.
        return cls(sqlite3.connect(str(path), check_same_thread=False))

    def close(self) -> None:
        self.conn.close()

    def validate(self, sql: str) -> list[str]:
        """Prepare one statement and return the names of its result columns.

        Raises:
            ValidationError: if the backend rejects the statement.
        """
        statement = sql.strip().rstrip(";").strip()
        if not statement:
            raise ValidationError("SQLITE_MISUSE", "empty statement", 1, statement)
        self.conn.execute(f"SAVEPOINT {_SAVEPOINT}")
        cursor = self.conn.cursor()
        try:
            cursor.execute(statement)
            columns = [description[0] for description in cursor.description or ()]
        except sqlite3.Error as exc:
            message = str(exc)
            code = getattr(exc, "sqlite_errorname", None)
            position = _error_position(statement, message)
            logger.info("validation failed: %s (%s) at %s", message, code, position)
            raise ValidationError(code, message, position, statement) from exc
        finally:
            cursor.close()
            # A statement such as COMMIT may already have ended the savepoint.
            if self.conn.in_transaction:
                self.conn.execute(f"ROLLBACK TO {_SAVEPOINT}")
                self.conn.execute(f"RELEASE {_SAVEPOINT}")
        return columns

    def validate_script(self, sql: str) -> list[list[str]]:
        """Validate each statement of a script in order, stopping at the first error."""
        results = []
        for statement in sqlparse.split(sql):
            if not statement.strip():
                continue
            results.append(self.validate(statement))
        return results
