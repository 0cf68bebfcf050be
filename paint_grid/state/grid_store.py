"""Persistence of grids on top of a key-value store.

Layout::

    grids        -> JSON array of grid ids, most recently saved first
    <id>         -> JSON metadata record
    <id>_data    -> JSON array of rows of ``number | null``
"""
from __future__ import annotations

import json
import logging
from typing import Any, List, Optional

from ..grid.codec import (
    GridMetadata,
    build_core,
    grid_metadata,
    parse_metadata,
    rows_to_storage,
    storage_to_rows,
)
from ..grid.core import GridCore
from ..utils.ordered_set import add_to_set_front
from .state_store import KeyValueStore

logger = logging.getLogger(__name__)

REGISTRY_KEY = "grids"
DATA_SUFFIX = "_data"


class GridStore:
    """Saves and restores :class:`GridCore` values."""

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def list_grid_ids(self) -> List[str]:
        raw = self._load_json(REGISTRY_KEY)
        if raw is None:
            return []
        if not isinstance(raw, list):
            logger.warning("Grid registry is not a list; ignoring it")
            return []
        return [grid_id for grid_id in raw if isinstance(grid_id, str)]

    def save(self, core: GridCore) -> None:
        """Write metadata, cells and registry entry. Store failures propagate."""

        grid_ids = self.list_grid_ids()
        self._store.set(core.id, json.dumps(grid_metadata(core)))
        self._store.set(core.id + DATA_SUFFIX, json.dumps(storage_to_rows(core.storage)))
        self._store.set(REGISTRY_KEY, json.dumps(add_to_set_front(grid_ids, core.id)))

    def load_by_id(self, grid_id: str) -> Optional[GridCore]:
        metadata = self._load_metadata(grid_id)
        if metadata is None:
            return None
        return self._load_with_data(metadata)

    def load_most_recent(self) -> Optional[GridCore]:
        candidates = [
            metadata
            for metadata in (self._load_metadata(grid_id) for grid_id in self.list_grid_ids())
            if metadata is not None
        ]
        candidates.sort(key=lambda metadata: metadata.updated_at, reverse=True)
        for metadata in candidates:
            core = self._load_with_data(metadata)
            if core is not None:
                logger.info("Loaded most recent grid %s", core.id)
                return core
        return None

    def _load_metadata(self, grid_id: str) -> Optional[GridMetadata]:
        raw = self._load_json(grid_id)
        if raw is None:
            return None
        metadata = parse_metadata(raw)
        if metadata is None:
            logger.warning("Skipping malformed metadata for grid %s", grid_id)
        elif metadata.id != grid_id:
            logger.warning("Metadata stored under %s names grid %s; skipping", grid_id, metadata.id)
            return None
        return metadata

    def _load_with_data(self, metadata: GridMetadata) -> Optional[GridCore]:
        raw = self._load_json(metadata.id + DATA_SUFFIX)
        if raw is None:
            logger.warning("No cell data stored for grid %s", metadata.id)
            return None
        storage = rows_to_storage(raw)
        if storage is None:
            logger.warning("Skipping malformed cell data for grid %s", metadata.id)
            return None
        return build_core(metadata, storage)

    def _load_json(self, key: str) -> Optional[Any]:
        text = self._store.get(key)
        if text is None:
            return None
        try:
            return json.loads(text)
        except (ValueError, RecursionError):
            logger.warning("Value stored under %s is not valid JSON", key)
            return None


__all__ = ["GridStore", "REGISTRY_KEY", "DATA_SUFFIX"]
