"""User settings for the sqlscope command line.

Settings live in ``settings.json`` inside the config directory
(``SQLSCOPE_SETTINGS_PATH`` points at a different file). Recognized keys:

- ``catalog_path``: JSON catalog used when ``--catalog`` is omitted.
- ``log_level``: level for the ``sqlscope`` logger (default ``WARNING``).

Unknown keys are kept as-is so newer settings files still load.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

from sqlscope.store import JSONFileStore, config_dir

logger = logging.getLogger(__name__)

ENV_SETTINGS_PATH = "SQLSCOPE_SETTINGS_PATH"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

DEFAULTS: dict[str, Any] = {
    "catalog_path": None,
    "log_level": "WARNING",
}


def settings_path() -> Path:
    override = os.environ.get(ENV_SETTINGS_PATH, "").strip()
    if override:
        return Path(override).expanduser()
    return config_dir() / "settings.json"


class SettingsStore(JSONFileStore):
    """The settings document, read fresh on every access."""

    def __init__(self, file_path: Path | None = None) -> None:
        super().__init__(file_path or settings_path())

    @classmethod
    def get_instance(cls) -> SettingsStore:
        """Shared store for the currently configured settings path."""
        return _get_store()

    def load_all(self) -> dict[str, Any]:
        data = self._read_json()
        if data is not None and not isinstance(data, dict):
            logger.warning("ignoring settings file %s: expected a JSON object", self.file_path)
        return data if isinstance(data, dict) else {}

    def save_all(self, settings: dict[str, Any]) -> None:
        self._write_json(settings)

    def get(self, key: str, default: Any = None) -> Any:
        """Stored value, else ``default``, else the built-in default for ``key``."""
        settings = self.load_all()
        if key in settings:
            return settings[key]
        return default if default is not None else DEFAULTS.get(key)

    def set(self, key: str, value: Any) -> None:
        settings = self.load_all()
        settings[key] = value
        self.save_all(settings)

    def delete(self, key: str) -> bool:
        """Remove ``key``; returns False if it was not set."""
        settings = self.load_all()
        if key not in settings:
            return False
        del settings[key]
        self.save_all(settings)
        return True

    def catalog_path(self) -> Path | None:
        value = self.get("catalog_path")
        return Path(str(value)).expanduser() if value else None

    def log_level(self) -> str:
        """Configured log level name; unrecognized values fall back to the default."""
        value = str(self.get("log_level")).upper()
        if value not in LOG_LEVELS:
            logger.warning("unknown log_level %r in %s, using %s", value, self.file_path, DEFAULTS["log_level"])
            return DEFAULTS["log_level"]
        return value


_store: SettingsStore | None = None


def _get_store() -> SettingsStore:
    global _store
    path = settings_path()
    if _store is None or _store.file_path != path:
        _store = SettingsStore(file_path=path)
    return _store


def load_settings() -> dict[str, Any]:
    return _get_store().load_all()


def save_settings(settings: dict[str, Any]) -> None:
    _get_store().save_all(settings)
