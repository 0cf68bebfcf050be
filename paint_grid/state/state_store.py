"""Key-value stores backing grid persistence."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List, Optional, Protocol


class PersistenceError(RuntimeError):
    """Raised when a store cannot read or write its backing medium."""


class KeyValueStore(Protocol):
    """String keys mapped to string values."""

    def get(self, key: str) -> Optional[str]:
        """Return the value stored under ``key`` if present."""

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

    def list_keys(self) -> List[str]:
        """Return every key currently held by the store."""


class InMemoryKeyValueStore:
    """Volatile store, primarily for tests."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._items: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        self._items[key] = value

    def list_keys(self) -> List[str]:
        return list(self._items)


class JSONFileKeyValueStore:
    """Very small store keeping every key in a single JSON object on disk."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def get(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        items = self._read()
        items[key] = value
        staging = self._path.with_name(self._path.name + ".tmp")
        try:
            with staging.open("w", encoding="utf-8") as f:
                json.dump(items, f, indent=2, sort_keys=True)
            staging.replace(self._path)
        except OSError as exc:
            raise PersistenceError(f"Could not write {self._path}: {exc}") from exc

    def list_keys(self) -> List[str]:
        return list(self._read())

    def _read(self) -> Dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            with self._path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError, RecursionError) as exc:
            raise PersistenceError(f"Could not read {self._path}: {exc}") from exc
        if not isinstance(data, dict):
            raise PersistenceError(f"{self._path} does not hold a JSON object")
        return {str(key): value for key, value in data.items() if isinstance(value, str)}


__all__ = ["PersistenceError", "KeyValueStore", "InMemoryKeyValueStore", "JSONFileKeyValueStore"]
