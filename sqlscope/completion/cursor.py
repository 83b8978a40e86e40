"""Editor cursor position."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Cursor:
    """A caret (``end is None``) or a selection in the SQL buffer.

    Offsets count Python string characters (code points), not UTF-8 bytes:
    an editor that reports byte columns must convert them first, or any
    non-ASCII text before the cursor shifts the position. Only ``start``
    drives scope resolution.
    """

    start: int
    end: int | None = None

    @classmethod
    def at_end(cls, sql: str) -> Cursor:
        return cls(len(sql))

    @property
    def range(self) -> tuple[int, int | None]:
        return (self.start, self.end)
