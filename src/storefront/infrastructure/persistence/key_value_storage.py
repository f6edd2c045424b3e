"""Local durable key/value storage.

A small ``localStorage``-like interface: string keys, string values.
``JsonFileStorage`` keeps the whole map in one JSON file.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path

logger = logging.getLogger(__name__)


class KeyValueStorage(ABC):

    @abstractmethod
    def get_item(self, key: str) -> str | None:
        """Return the stored string, or None if the key is absent."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store *value* under *key*, replacing any previous value."""

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Delete *key*. Removing an absent key is a no-op."""


class JsonFileStorage(KeyValueStorage):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- KeyValueStorage interface --------------------------------------------

    def get_item(self, key: str) -> str | None:
        value = self._load_raw().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        raw = self._load_raw()
        raw[key] = value
        self._persist_raw(raw)

    def remove_item(self, key: str) -> None:
        raw = self._load_raw()
        if key in raw:
            del raw[key]
            self._persist_raw(raw)

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> dict[str, str]:
        # An unreadable file reads as empty; the next write replaces it.
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        except ValueError as exc:
            logger.warning("Ignoring unreadable storage file %s: %s", self._file_path, exc)
            return {}
        if not isinstance(raw, dict):
            logger.warning("Ignoring storage file %s: not a JSON object", self._file_path)
            return {}
        return raw

    def _persist_raw(self, raw: dict[str, str]) -> None:
        self._file_path.write_text(
            json.dumps(raw, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("{}", encoding="utf-8")
