"""The durable state of one canvas."""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Sequence, Tuple

from .storage import SparseStorage
from .viewport import Viewport


def now_ms() -> int:
    return int(time.time() * 1000)


def make_grid_id(created_at: int) -> str:
    """Build a sortable, key-safe id such as ``20261019T120000123Z``."""

    moment = datetime.fromtimestamp(created_at / 1000, tz=timezone.utc)
    return f"{moment.strftime('%Y%m%dT%H%M%S')}{created_at % 1000:03d}Z"


@dataclass
class GridCore:
    """Identity, geometry, palette, cells and timestamps of a grid."""

    id: str
    viewport: Viewport
    palette: List[str]
    created_at: int
    updated_at: int
    storage: SparseStorage = field(default_factory=SparseStorage)

    @classmethod
    def fresh(cls, palette: Sequence[str], viewport_size: int, created_at: int) -> GridCore:
        return cls(
            id=make_grid_id(created_at),
            viewport=Viewport(size=viewport_size),
            palette=list(palette),
            created_at=created_at,
            updated_at=created_at,
        )

    @property
    def viewport_size(self) -> int:
        return self.viewport.size

    @property
    def viewport_corner(self) -> Tuple[int, int]:
        return self.viewport.corner


__all__ = ["GridCore", "make_grid_id", "now_ms"]
