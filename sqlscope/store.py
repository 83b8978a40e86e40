"""JSON file persistence shared by settings and catalog documents."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

ENV_CONFIG_DIR = "SQLSCOPE_CONFIG_DIR"
DEFAULT_CONFIG_DIR = Path.home() / ".sqlscope"


def config_dir() -> Path:
    """Directory holding sqlscope's own files (``SQLSCOPE_CONFIG_DIR`` or ``~/.sqlscope``)."""
    override = os.environ.get(ENV_CONFIG_DIR, "").strip()
    return Path(override).expanduser() if override else DEFAULT_CONFIG_DIR


class JSONFileStore:
    """A single JSON document on disk.

    Reads are lenient: a missing or corrupt file reads as None. Writes go to a
    temp file in the same directory and are renamed into place, so readers
    never observe a half-written document.
    """

    # Private stores (settings) restrict the file and its directory to the owner.
    private = True

    def __init__(self, file_path: Path) -> None:
        self._file_path = Path(file_path)

    @property
    def file_path(self) -> Path:
        return self._file_path

    def exists(self) -> bool:
        return self._file_path.exists()

    def _ensure_dir(self) -> None:
        directory = self._file_path.parent
        directory.mkdir(parents=True, exist_ok=True)
        if self.private:
            try:
                os.chmod(directory, 0o700)
            except OSError:
                pass  # chmod is unsupported on some platforms

    def _load(self) -> Any:
        """Parse the file, letting OSError and JSONDecodeError propagate."""
        with open(self._file_path, encoding="utf-8") as f:
            return json.load(f)

    def _read_json(self) -> Any:
        """Parsed document, or None if the file is missing or not valid JSON."""
        if not self.exists():
            return None
        try:
            return self._load()
        except (json.JSONDecodeError, TypeError):
            return None

    def _write_json(self, data: Any) -> None:
        self._ensure_dir()
        fd, tmp_path = tempfile.mkstemp(dir=self._file_path.parent, prefix=".tmp_", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
                f.write("\n")
            os.chmod(tmp_path, 0o600 if self.private else 0o644)
            os.replace(tmp_path, self._file_path)
        except BaseException:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise
