"""Sparse cell storage for the paint grid.

Cells are addressed by absolute ``(x, y)`` coordinates on an unbounded plane.
Only rows that have been touched are materialized, and inside a row only the
painted columns are held.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)


class CellStatus(Enum):
    UNSET = "unset"
    OUT_OF_BOUNDS = "out_of_bounds"
    PAINTED = "painted"


@dataclass(frozen=True)
class CellLookup:
    """Result of reading one coordinate from :class:`SparseStorage`."""

    status: CellStatus
    value: Optional[int] = None

    @property
    def is_unset(self) -> bool:
        return self.status is CellStatus.UNSET

    @property
    def is_out_of_bounds(self) -> bool:
        return self.status is CellStatus.OUT_OF_BOUNDS

    @property
    def is_painted(self) -> bool:
        return self.status is CellStatus.PAINTED


UNSET = CellLookup(CellStatus.UNSET)
OUT_OF_BOUNDS = CellLookup(CellStatus.OUT_OF_BOUNDS)


class SparseStorage:
    """Row-indexed mapping from coordinates to color indices."""

    def __init__(self, rows: Optional[Dict[int, Dict[int, int]]] = None) -> None:
        self._rows: Dict[int, Dict[int, int]] = {}
        for y, row in (rows or {}).items():
            self._rows[y] = dict(row)

    def value_at(self, x: int, y: int) -> CellLookup:
        if x < 0 or y < 0:
            return OUT_OF_BOUNDS
        value = self._rows.get(y, {}).get(x)
        if value is None:
            return UNSET
        return CellLookup(CellStatus.PAINTED, value)

    def has_value(self, x: int, y: int) -> bool:
        return self.value_at(x, y).is_painted

    def ensure_row(self, y: int) -> None:
        if y not in self._rows:
            logger.debug("Materializing row %s", y)
            self._rows[y] = {}

    def set(self, x: int, y: int, value: int) -> None:
        """Write unconditionally; policy checks belong to the caller."""

        self.ensure_row(y)
        self._rows[y][x] = value

    def size(self) -> Tuple[int, int]:
        """Return ``(columns, rows)`` spanned by the stored data."""

        row_count = max(self._rows) + 1 if self._rows else 0
        column_count = max((max(row) + 1 for row in self._rows.values() if row), default=0)
        return column_count, row_count

    def cells(self) -> Iterator[Tuple[int, int, int]]:
        """Yield ``(x, y, value)`` for every painted cell in row order."""

        for y in sorted(self._rows):
            row = self._rows[y]
            for x in sorted(row):
                yield x, y, row[x]

    def row_indices(self) -> List[int]:
        return sorted(self._rows)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SparseStorage):
            return NotImplemented
        return list(self.cells()) == list(other.cells())

    def __len__(self) -> int:
        return sum(len(row) for row in self._rows.values())


__all__ = ["CellStatus", "CellLookup", "UNSET", "OUT_OF_BOUNDS", "SparseStorage"]
