"""Projections between :class:`GridCore` and its JSON shapes.

Three shapes exist:

* metadata record -- every field except the cells, stored under the grid id
* data record -- the cells as an array of rows, holes written as ``null``
* exchange document -- metadata plus ``data`` in one self-contained object
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .core import GridCore
from .storage import SparseStorage
from .viewport import MIN_CORNER, Viewport

logger = logging.getLogger(__name__)

Rows = List[Optional[List[Optional[int]]]]


@dataclass(frozen=True)
class GridMetadata:
    id: str
    viewport_size: int
    palette: List[str]
    created_at: int
    updated_at: int
    viewport_corner: Tuple[int, int] = (MIN_CORNER, MIN_CORNER)


def grid_metadata(core: GridCore) -> Dict[str, Any]:
    x, y = core.viewport_corner
    return {
        "id": core.id,
        "viewportSize": core.viewport_size,
        "palette": list(core.palette),
        "createdAt": core.created_at,
        "updatedAt": core.updated_at,
        "viewportCorner": {"x": x, "y": y},
    }


def storage_to_rows(storage: SparseStorage) -> Rows:
    _, row_count = storage.size()
    rows: Rows = [None] * row_count
    for y in storage.row_indices():
        rows[y] = []
    for x, y, value in storage.cells():
        row = rows[y]
        if row is None:  # pragma: no cover - every stored row was seeded above
            continue
        row.extend([None] * (x + 1 - len(row)))
        row[x] = value
    return rows


def rows_to_storage(data: Any) -> Optional[SparseStorage]:
    """Rebuild storage from an array of rows; ``None`` when the shape is wrong."""

    if not isinstance(data, list):
        return None
    storage = SparseStorage()
    for y, row in enumerate(data):
        if row is None:
            continue
        if not isinstance(row, list):
            return None
        storage.ensure_row(y)
        for x, value in enumerate(row):
            if value is None:
                continue
            index = _as_int(value)
            if index is None or index < 0:
                return None
            storage.set(x, y, index)
    return storage


def parse_metadata(data: Any) -> Optional[GridMetadata]:
    if not isinstance(data, dict):
        return None
    grid_id = data.get("id")
    viewport_size = _as_int(data.get("viewportSize"))
    palette = data.get("palette")
    created_at = _as_int(data.get("createdAt"))
    updated_at = _as_int(data.get("updatedAt"))
    if not isinstance(grid_id, str) or not grid_id:
        return None
    if viewport_size is None or viewport_size < 1:
        return None
    if not isinstance(palette, list) or not all(isinstance(color, str) for color in palette):
        return None
    if created_at is None or updated_at is None:
        return None

    corner = (MIN_CORNER, MIN_CORNER)
    raw_corner = data.get("viewportCorner")
    if raw_corner is not None:
        if not isinstance(raw_corner, dict):
            return None
        x, y = _as_int(raw_corner.get("x")), _as_int(raw_corner.get("y"))
        if x is None or y is None or x < MIN_CORNER or y < MIN_CORNER:
            return None
        corner = (x, y)

    return GridMetadata(
        id=grid_id,
        viewport_size=viewport_size,
        palette=list(palette),
        created_at=created_at,
        updated_at=max(created_at, updated_at),
        viewport_corner=corner,
    )


def build_core(metadata: GridMetadata, storage: SparseStorage) -> GridCore:
    x, y = metadata.viewport_corner
    return GridCore(
        id=metadata.id,
        viewport=Viewport(size=metadata.viewport_size, x=x, y=y),
        palette=list(metadata.palette),
        created_at=metadata.created_at,
        updated_at=metadata.updated_at,
        storage=storage,
    )


def to_json(core: GridCore) -> str:
    """Serialize the whole grid as one exchange document."""

    document = grid_metadata(core)
    document["data"] = storage_to_rows(core.storage)
    return json.dumps(document)


def from_json(text: str) -> Optional[GridCore]:
    """Parse an exchange document, returning ``None`` if it is not a valid grid."""

    try:
        document = json.loads(text)
    except (TypeError, ValueError, RecursionError):
        logger.warning("Exchange document is not valid JSON")
        return None
    metadata = parse_metadata(document)
    if metadata is None:
        logger.warning("Exchange document is missing grid metadata")
        return None
    storage = rows_to_storage(document.get("data", document.get("array")))
    if storage is None:
        logger.warning("Exchange document for grid %s has malformed cell data", metadata.id)
        return None
    return build_core(metadata, storage)


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


__all__ = [
    "GridMetadata",
    "grid_metadata",
    "storage_to_rows",
    "rows_to_storage",
    "parse_metadata",
    "build_core",
    "to_json",
    "from_json",
]
