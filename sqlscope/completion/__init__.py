"""SQL completion engine.

Provides cursor-aware column suggestions:
- Scope detection by parenthesis depth (subqueries stay isolated)
- Alias recognition (FROM users u -> u. suggests users columns)
- Multi-schema aggregation in catalog order
"""

from .cursor import Cursor
from .engine import CompletionEngine, gather_columns, list_tables, search
from .scope import Scope, extract_tables, locate_from, locate_select, qualified_prefix, resolve_scope
from .suggestion import Suggestion, SuggestionType

__all__ = [
    # Main API
    "CompletionEngine",
    "search",
    "list_tables",
    # Types
    "Cursor",
    "Scope",
    "Suggestion",
    "SuggestionType",
    # Scope steps
    "resolve_scope",
    "locate_select",
    "locate_from",
    "extract_tables",
    "qualified_prefix",
    "gather_columns",
]
