"""Key-value persistence for the daily usage record.

The browser version kept this in localStorage; here it is any object with
``get(key)`` / ``set(key, value)`` over strings.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    """Process-local store, used by tests and when no file is configured."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def snapshot(self) -> dict[str, str]:
        return dict(self._data)


class JsonFileStore(MemoryStore):
    """Store backed by a single JSON object on disk, rewritten on every set."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        super().__init__(self._read())

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("[store] Could not read %s (%s). Starting empty.", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("[store] %s is not a JSON object. Starting empty.", self.path)
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def set(self, key: str, value: str) -> None:
        super().set(key, value)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Write beside the target, then swap, so a crash never leaves half a file
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(
            json.dumps(self._data, ensure_ascii=False, indent=2), encoding="utf-8"
        )
        os.replace(tmp, self.path)


def open_store(path: str) -> KeyValueStore:
    """Return a file store for *path*, or an in-memory one when it is empty."""
    if not path:
        logger.info("[store] No store path configured; usage record is in-memory.")
        return MemoryStore()
    logger.info("[store] Using %s", path)
    return JsonFileStore(path)
