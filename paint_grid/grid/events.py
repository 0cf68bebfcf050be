"""Change notifications emitted by the grid engine."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)

CELL_PAINTED = "cell_painted"
VIEWPORT_MOVED = "viewport_moved"
GRID_REPLACED = "grid_replaced"


@dataclass(frozen=True)
class GridChange:
    """Describes one accepted mutation."""

    kind: str
    grid_id: str
    updated_at: int
    cell: Optional[Tuple[int, int]] = None
    value: Optional[int] = None
    viewport_corner: Optional[Tuple[int, int]] = None
    persisted: bool = False


ChangeListener = Callable[[GridChange], None]


class ChangeNotifier:
    """Keeps the registered listeners and fans events out to them in order."""

    def __init__(self) -> None:
        self._listeners: List[ChangeListener] = []

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """Register ``listener`` and return a callable that removes it again."""

        self._listeners.append(listener)

        def _unsubscribe() -> None:
            self.unsubscribe(listener)

        return _unsubscribe

    def unsubscribe(self, listener: ChangeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def emit(self, change: GridChange) -> None:
        logger.debug("Emitting %s for grid %s to %s listeners", change.kind, change.grid_id, len(self._listeners))
        for listener in list(self._listeners):
            listener(change)


__all__ = [
    "CELL_PAINTED",
    "VIEWPORT_MOVED",
    "GRID_REPLACED",
    "GridChange",
    "ChangeListener",
    "ChangeNotifier",
]
