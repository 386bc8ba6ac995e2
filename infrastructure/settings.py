"""Settings access helpers for JSON-based configuration."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

APP_DIR_NAME = "DayNotes"
DEFAULT_DATA_FILE_NAME = "calendar_data.json"


def get_app_data_directory() -> Path:
    """Per-user directory for DayNotes data and logs."""
    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA")
        root = Path(base) if base else Path.home() / "AppData" / "Local"
    else:
        base = os.environ.get("XDG_DATA_HOME")
        root = Path(base) if base else Path.home() / ".local" / "share"
    return root / APP_DIR_NAME


def expand_path(raw: Any, default: Path) -> Path:
    """Return `raw` as a path with env vars and `~` expanded, or `default`."""
    if not isinstance(raw, str) or not raw.strip():
        return default
    return Path(os.path.expanduser(os.path.expandvars(raw.strip())))


class JsonSettings:
    """Lightweight JSON settings reader with dotted-key access."""

    def __init__(self, settings_path: str | Path) -> None:
        self._path = Path(settings_path)
        if not self._path.exists():
            raise FileNotFoundError(f"settings.json not found: {self._path}")
        with self._path.open("r", encoding="utf-8") as f:
            self._data = json.load(f)

    def get(self, key: str, default: Any | None = None) -> Any:
        """Return value for dotted `key`, or `default` if not present."""
        parts = key.split(".")
        node: Any = self._data
        for part in parts:
            if isinstance(node, dict) and part in node:
                node = node[part]
            else:
                return default
        return node

    def get_int(self, key: str, default: int) -> int:
        """Return dotted `key` as int, falling back to `default` on bad values."""
        try:
            return int(self.get(key, default) or default)
        except (ValueError, TypeError):
            return default

    def data_file_path(self) -> Path:
        """Location of the persisted annotation blob."""
        return expand_path(
            self.get("storage.data_file"), get_app_data_directory() / DEFAULT_DATA_FILE_NAME
        )
