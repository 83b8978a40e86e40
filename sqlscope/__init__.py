"""sqlscope - cursor-aware SQL autocomplete backed by a schema catalog."""

from typing import TYPE_CHECKING, Any

__all__ = [
    "__version__",
    "main",
    "Column",
    "CompletionEngine",
    "Cursor",
    "DataType",
    "Database",
    "Schema",
    "Suggestion",
    "SuggestionType",
    "Table",
    "search",
    "tokenize",
]

__version__ = "0.1.0"

if TYPE_CHECKING:
    from .catalog import Column, DataType, Database, Schema, Table
    from .cli import main
    from .completion import CompletionEngine, Cursor, Suggestion, SuggestionType, search
    from .sql import tokenize

_LAZY = {
    "Column": "sqlscope.catalog",
    "DataType": "sqlscope.catalog",
    "Database": "sqlscope.catalog",
    "Schema": "sqlscope.catalog",
    "Table": "sqlscope.catalog",
    "CompletionEngine": "sqlscope.completion",
    "Cursor": "sqlscope.completion",
    "Suggestion": "sqlscope.completion",
    "SuggestionType": "sqlscope.completion",
    "search": "sqlscope.completion",
    "tokenize": "sqlscope.sql",
    "main": "sqlscope.cli",
}


def __getattr__(name: str) -> Any:
    """Lazy import so ``import sqlscope`` stays side-effect free."""
    module_name = _LAZY.get(name)
    if module_name is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    import importlib

    return getattr(importlib.import_module(module_name), name)
