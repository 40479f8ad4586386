from __future__ import annotations

import json
import logging
import threading
from collections.abc import Callable
from pathlib import Path

logger = logging.getLogger(__name__)


class FavoritesStorage:
    """
    String key/value slots, one set of slots per browser session.

    Mirrors browser local storage: values are opaque strings. When a path is
    given, the file is read once here and rewritten on every write.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path
        self._lock = threading.Lock()
        self._slots: dict[str, dict[str, str]] = self._read()

    def _read(self) -> dict[str, dict[str, str]]:
        if self._path is None or not self._path.exists():
            return {}
        try:
            with open(self._path, encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.warning("Ignoring unreadable favorites file %s", self._path, exc_info=True)
            return {}
        if not isinstance(data, dict) or not all(isinstance(s, dict) for s in data.values()):
            logger.warning("Ignoring favorites file %s: expected an object of session slots", self._path)
            return {}
        logger.info("Loaded favorites for %d sessions from %s", len(data), self._path)
        return {str(ns): dict(slots) for ns, slots in data.items()}

    def _write(self) -> None:
        if self._path is None:
            return
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(self._slots, f, ensure_ascii=False)
        tmp.replace(self._path)

    def get_item(self, namespace: str, key: str) -> str | None:
        with self._lock:
            return self._slots.get(namespace, {}).get(key)

    def set_item(self, namespace: str, key: str, value: str) -> None:
        with self._lock:
            self._slots.setdefault(namespace, {})[key] = value
            self._write()

    def update(self, namespace: str, key: str, fn: Callable[[str | None], str]) -> str:
        """Replace a slot with ``fn(current)`` while holding the lock. Returns the new value."""
        with self._lock:
            slots = self._slots.setdefault(namespace, {})
            value = fn(slots.get(key))
            slots[key] = value
            self._write()
            return value

    def clear(self) -> None:
        with self._lock:
            self._slots.clear()
            self._write()
