#!/usr/bin/env python3
"""sqlscope - cursor-aware SQL column suggestions from a schema catalog."""

from __future__ import annotations

import argparse
import json
import os
import sys
from typing import Any

from rich.console import Console
from rich.markup import escape as escape_markup

from .catalog import Database, database_to_dict, load_catalog_file, load_sqlite_file, save_catalog_file
from .completion import CompletionEngine, Cursor
from .errors import SqlscopeError, ValidationError
from .logging_setup import configure_logging
from .settings import SettingsStore
from .validation import Validator


def _read_sql(args: argparse.Namespace) -> str:
    if args.file:
        with open(args.file, encoding="utf-8") as f:
            return f.read()
    if args.sql is None or args.sql == "-":
        return sys.stdin.read()
    return args.sql


def _load_catalog(args: argparse.Namespace, settings: SettingsStore) -> Database:
    if getattr(args, "file_path", None):
        return load_sqlite_file(args.file_path)
    path = args.catalog or settings.catalog_path()
    if not path:
        raise SqlscopeError("no catalog given: pass --catalog, --file-path or set catalog_path in settings")
    return load_catalog_file(path)


def cmd_complete(args: argparse.Namespace, settings: SettingsStore, console: Console) -> int:
    sql = _read_sql(args)
    cursor = Cursor(args.cursor, args.cursor_end) if args.cursor is not None else Cursor.at_end(sql)
    engine = CompletionEngine(_load_catalog(args, settings))
    suggestions = engine.suggest(sql, cursor)
    if args.format == "json":
        payload: list[dict[str, Any]] = [
            {
                "type": suggestion.type.name.lower(),
                "name": suggestion.name,
                "data_type": str(suggestion.data_type) if suggestion.data_type is not None else None,
                "schema": suggestion.schema,
            }
            for suggestion in suggestions
        ]
        console.print_json(json.dumps(payload))
        return 0
    for suggestion in suggestions:
        console.print(escape_markup(str(suggestion)), highlight=False)
    return 0


def cmd_tables(args: argparse.Namespace, settings: SettingsStore, console: Console) -> int:
    engine = CompletionEngine(_load_catalog(args, settings))
    for suggestion in engine.tables():
        console.print(escape_markup(str(suggestion)), highlight=False)
    return 0


def cmd_validate(args: argparse.Namespace, settings: SettingsStore, console: Console) -> int:
    sql = _read_sql(args)
    validator = Validator.for_file(args.file_path)
    try:
        results = validator.validate_script(sql)
    except ValidationError as exc:
        console.print(f"[red]Error:[/red] {escape_markup(str(exc))}")
        if exc.position is not None:
            console.print(escape_markup(exc.statement or sql.strip()), highlight=False)
            console.print(" " * (exc.position - 1) + "^", highlight=False)
        return 1
    finally:
        validator.close()
    for columns in results:
        console.print(escape_markup(", ".join(columns)) if columns else "[dim](no result columns)[/dim]")
    return 0


def cmd_catalog(args: argparse.Namespace, settings: SettingsStore, console: Console) -> int:
    database = load_sqlite_file(args.file_path)
    if args.output:
        save_catalog_file(database, args.output)
        console.print(f"Wrote catalog for {escape_markup(database.name)} to {escape_markup(args.output)}")
        return 0
    console.print_json(json.dumps(database_to_dict(database)))
    return 0


def _add_sql_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("sql", nargs="?", help="SQL text ('-' or omitted reads stdin)")
    parser.add_argument("--file", "-f", help="Read SQL from a file")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sqlscope",
        description="Cursor-aware SQL column suggestions from a schema catalog",
    )
    parser.add_argument(
        "--settings",
        metavar="PATH",
        help="Path to settings JSON file (overrides ~/.sqlscope/settings.json)",
    )
    parser.add_argument(
        "--log-level",
        metavar="LEVEL",
        help="Logging level for diagnostics on stderr (default: log_level setting or WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    complete_parser = subparsers.add_parser("complete", help="Suggest columns at a cursor position")
    _add_sql_arguments(complete_parser)
    complete_parser.add_argument("--cursor", "-c", type=int, help="Cursor offset (default: end of SQL)")
    complete_parser.add_argument("--cursor-end", type=int, help="Selection end offset")
    complete_parser.add_argument("--catalog", help="JSON catalog file (default: catalog_path setting)")
    complete_parser.add_argument("--file-path", help="Introspect this SQLite file instead of a JSON catalog")
    complete_parser.add_argument(
        "--format",
        "-o",
        default="text",
        choices=["text", "json"],
        help="Output format (default: text)",
    )
    complete_parser.set_defaults(handler=cmd_complete)

    tables_parser = subparsers.add_parser("tables", help="List every table in the catalog")
    tables_parser.add_argument("--catalog", help="JSON catalog file (default: catalog_path setting)")
    tables_parser.add_argument("--file-path", help="Introspect this SQLite file instead of a JSON catalog")
    tables_parser.set_defaults(handler=cmd_tables)

    validate_parser = subparsers.add_parser("validate", help="Validate statements against a SQLite database")
    _add_sql_arguments(validate_parser)
    validate_parser.add_argument("--file-path", required=True, help="SQLite database file")
    validate_parser.set_defaults(handler=cmd_validate)

    catalog_parser = subparsers.add_parser("catalog", help="Dump a SQLite database's catalog as JSON")
    catalog_parser.add_argument("--file-path", required=True, help="SQLite database file")
    catalog_parser.add_argument("--output", "-o", help="Write to this file instead of stdout")
    catalog_parser.set_defaults(handler=cmd_catalog)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.settings:
        os.environ["SQLSCOPE_SETTINGS_PATH"] = str(args.settings)
    if args.command is None:
        parser.print_help()
        return 1

    settings = SettingsStore.get_instance()
    configure_logging(args.log_level or settings.log_level())
    console = Console()
    try:
        return args.handler(args, settings, console)
    except (SqlscopeError, OSError) as exc:
        console.print(f"[red]Error:[/red] {escape_markup(str(exc))}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
