"""Exception types raised by sqlscope.

Autocomplete itself never raises: a missing scope or an unknown table simply
produces no suggestions. These types cover the fallible edges around it.
"""

from __future__ import annotations


class SqlscopeError(Exception):
    """Base class for all sqlscope errors."""


class CatalogError(SqlscopeError):
    """Raised when a catalog document cannot be read or has the wrong shape."""


class ValidationError(SqlscopeError):
    """A statement was rejected by the backend it was prepared against.

    Attributes:
        code: Backend error code (for SQLite, the error name such as ``SQLITE_ERROR``).
        message: Backend error message.
        position: 1-based character offset of the offending token within
            ``statement``, if known.
        statement: The statement as it was sent to the backend.
    """

    def __init__(
        self,
        code: str | None,
        message: str,
        position: int | None = None,
        statement: str | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.position = position
        self.statement = statement

    def __str__(self) -> str:
        location = f" at position {self.position}" if self.position is not None else ""
        code = f"[{self.code}] " if self.code else ""
        return f"{code}{self.message}{location}"
