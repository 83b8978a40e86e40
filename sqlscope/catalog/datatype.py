"""Column data types as reported by the catalog."""

from __future__ import annotations

import re
from dataclasses import dataclass

_TYPE_PATTERN = re.compile(r"^\s*([A-Za-z_][A-Za-z0-9_ ]*?)\s*(?:\(\s*([0-9\s,]*)\s*\))?\s*$")


@dataclass(frozen=True, order=True)
class DataType:
    """A column type: a lower-case name plus optional size/precision arguments.

    ``DataType("varchar", (255,))`` renders as ``varchar(255)``.
    """

    name: str
    args: tuple[int, ...] = ()

    @classmethod
    def parse(cls, text: str) -> DataType:
        """Parse a declared type such as ``VARCHAR(255)`` or ``numeric(10, 2)``.

        Types the pattern does not understand (``enum('a','b')``, array
        suffixes, ...) are kept verbatim, lower-cased, with no arguments.
        An empty declaration becomes ``text``, the SQLite default affinity.
        """
        if not text or not text.strip():
            return cls("text")
        match = _TYPE_PATTERN.match(text)
        if match is None:
            return cls(text.strip().lower())
        name = " ".join(match.group(1).lower().split())
        raw_args = match.group(2)
        if not raw_args or not raw_args.strip():
            return cls(name)
        parts = [part.strip() for part in raw_args.split(",")]
        if not all(part.isdigit() for part in parts):
            # "varchar(1 2)", "numeric(10,)" and the like
            return cls(text.strip().lower())
        return cls(name, tuple(int(part) for part in parts))

    def __str__(self) -> str:
        if not self.args:
            return self.name
        return f"{self.name}({', '.join(str(arg) for arg in self.args)})"
