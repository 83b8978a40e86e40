"""Suggestion values returned to the editor."""

from __future__ import annotations

from enum import IntEnum
from typing import NamedTuple

from sqlscope.catalog import DataType


class SuggestionType(IntEnum):
    """Kinds of completion suggestions, in their sort order."""

    KEYWORD = 1
    COLUMN = 2
    TABLE = 3


class Suggestion(NamedTuple):
    """A completion suggestion.

    Which fields are set depends on ``type``:
    - KEYWORD: ``name`` is the keyword text.
    - COLUMN: ``name`` and ``data_type``.
    - TABLE: ``name`` and ``schema``.

    Suggestions compare by (type, name, data_type, schema), which gives the
    deterministic ordering tests rely on.
    """

    type: SuggestionType
    name: str
    data_type: DataType | None = None
    schema: str | None = None

    @classmethod
    def keyword(cls, text: str) -> Suggestion:
        return cls(SuggestionType.KEYWORD, text)

    @classmethod
    def column(cls, name: str, data_type: DataType) -> Suggestion:
        return cls(SuggestionType.COLUMN, name, data_type=data_type)

    @classmethod
    def table(cls, schema: str, name: str) -> Suggestion:
        return cls(SuggestionType.TABLE, name, schema=schema)

    def __str__(self) -> str:
        if self.type is SuggestionType.COLUMN:
            return f"{self.name}::{self.data_type}"
        if self.type is SuggestionType.TABLE:
            return f"{self.schema}.{self.name}"
        return self.name
