# gokifu/common/config_store.py
"""JSON-based settings store.

Persists the flat settings dict (SGF folder, board size, opening patterns,
...) that GoKifuConfig is built from. Missing files behave like empty
settings; corrupt files are moved aside and treated as empty.

Usage:
    from gokifu.common.config_store import SettingsStore

    store = SettingsStore("settings.json")
    store.update(sgf_folder="SGF", board_size=19)
    config = store.get_config()
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
import tempfile
from datetime import datetime
from threading import Lock
from typing import Any

from gokifu.common.typed_config import GoKifuConfig


def _get_logger() -> logging.Logger:
    """Get module logger (lazy to avoid side effect at import time)."""
    return logging.getLogger(__name__)


class SettingsStore:
    """JSON file-backed settings (one flat object).

    Thread-safe for concurrent access.

    Args:
        filename: Path to JSON file
        indent: JSON indentation (default 4)
    """

    def __init__(self, filename: str, indent: int = 4):
        self._filename = filename
        self._indent = indent
        self._lock = Lock()
        self._data: dict[str, Any] = {}
        self._load()

    @property
    def filename(self) -> str:
        return self._filename

    def _load(self) -> None:
        """Load data from the JSON file."""
        if not os.path.exists(self._filename):
            self._data = {}
            return
        try:
            with open(self._filename, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            _get_logger().warning("Corrupt settings file %s: %s", self._filename, e, exc_info=True)
            # Preserve corrupt file for manual recovery with timestamp
            try:
                timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
                os.rename(self._filename, f"{self._filename}.corrupt.{timestamp}")
            except OSError:
                pass  # Already logged above
            self._data = {}
            return
        if not isinstance(data, dict):
            _get_logger().warning(
                "Settings file %s does not hold an object (got %s), ignoring", self._filename, type(data).__name__
            )
            data = {}
        self._data = data

    def _save(self) -> None:
        """Save data to the JSON file atomically (temp file + os.replace).

        Raises:
            OSError: If file operations fail (caller handles).
            TypeError: If JSON serialization fails.
        """
        dirname = os.path.dirname(self._filename)
        save_dir = dirname if dirname else "."
        os.makedirs(save_dir, exist_ok=True)

        fd = None
        temp_path = None
        try:
            fd, temp_path = tempfile.mkstemp(suffix=".tmp", dir=save_dir)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                fd = None  # os.fdopen took ownership
                json.dump(self._data, f, indent=self._indent, ensure_ascii=False)
                f.flush()
                os.fsync(f.fileno())
            os.replace(temp_path, self._filename)
            temp_path = None
        finally:
            if fd is not None:
                os.close(fd)
            if temp_path is not None:
                with contextlib.suppress(OSError):
                    os.unlink(temp_path)

    def load(self) -> dict[str, Any]:
        """Return a shallow copy of the stored settings."""
        with self._lock:
            return dict(self._data)

    def save(self, data: dict[str, Any]) -> None:
        """Replace all settings and persist."""
        with self._lock:
            self._data = dict(data)
            self._save()

    def update(self, **kwargs: Any) -> None:
        """Merge the given keys into the settings and persist."""
        with self._lock:
            self._data.update(kwargs)
            self._save()

    def get_config(self) -> GoKifuConfig:
        """Typed view of the current settings."""
        return GoKifuConfig.from_dict(self.load())

    def __repr__(self) -> str:
        return f"SettingsStore({self._filename!r})"
