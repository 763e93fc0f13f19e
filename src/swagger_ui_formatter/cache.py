"""Cache store used to memoize library lookups.

The host framework owns the real shared cache. This module only needs
get/set/invalidate by key, so the store is an abstract port with an
in-memory implementation and a JSON file implementation for the CLI.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

logger = logging.getLogger(__name__)

LIBRARY_PATH_KEY = "swagger_ui_formatter.library_path"
SVG_DEFINITIONS_KEY = "swagger_ui_formatter.svg_definitions"


class CacheBackend(ABC):
    """Key-value store with atomic get, set and invalidate.

    ``get`` returns None on a miss, so None itself cannot be stored.
    """

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the cached value for key, or None on a miss."""
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        ...

    @abstractmethod
    def invalidate(self, key: str) -> None:
        """Drop key. Invalidating a missing key is a no-op."""
        ...


class MemoryCache(CacheBackend):
    """Process-local cache backed by a dict."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def invalidate(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._data


class FileCache(CacheBackend):
    """Cache persisted as a JSON object in a single file.

    Lets separate CLI runs share memoized lookups. A missing, unreadable or
    corrupt file reads as an empty cache.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def get(self, key: str) -> str | None:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def invalidate(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)

    def _load(self) -> dict:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable cache file %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: dict) -> None:
        # Readers only ever see a complete file.
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, sort_keys=True)
            os.replace(tmp, self.path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise
