"""Windowed, append-only paint grid."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Sequence, Tuple

from ..state.state_store import PersistenceError
from ..utils.metrics import elapsed_ms, round_to
from . import codec
from .core import GridCore, now_ms
from .events import CELL_PAINTED, GRID_REPLACED, VIEWPORT_MOVED, ChangeListener, ChangeNotifier, GridChange
from .palette import OUT_OF_PALETTE_COLOR, PaletteResolver
from .storage import CellLookup

if TYPE_CHECKING:  # pragma: no cover
    from ..state.grid_store import GridStore

logger = logging.getLogger(__name__)


@dataclass
class GridMetrics:
    """Observations about persistence; never saved with the grid."""

    last_save_ms: Optional[float] = None
    saves: int = 0
    failed_saves: int = 0
    last_error: Optional[str] = None


@dataclass(frozen=True)
class GridInfo:
    size: Tuple[int, int]
    viewport_corner: Tuple[int, int]

    def to_dict(self) -> Dict[str, Any]:
        x, y = self.viewport_corner
        return {"size": list(self.size), "viewportCorner": {"x": x, "y": y}}


class GridEngine:
    """Owns one :class:`GridCore` and enforces how it may change.

    Writes use viewport-local coordinates and follow a first-write-wins
    policy: a painted cell is never changed, and only cells inside the
    current viewport can be painted. Every accepted mutation bumps
    ``updated_at``, is written through to the store (when one is attached)
    and is then announced to subscribers.
    """

    def __init__(
        self,
        core: GridCore,
        *,
        store: Optional["GridStore"] = None,
        clock: Callable[[], int] = now_ms,
        fallback_color: str = OUT_OF_PALETTE_COLOR,
    ) -> None:
        self._core = core
        self._store = store
        self._clock = clock
        self._fallback_color = fallback_color
        self._resolver = PaletteResolver(core.palette, fallback_color)
        self._notifier = ChangeNotifier()
        self.metrics = GridMetrics()

    @classmethod
    def create(
        cls,
        palette: Sequence[str],
        viewport_size: int,
        *,
        store: Optional["GridStore"] = None,
        clock: Callable[[], int] = now_ms,
    ) -> GridEngine:
        """Start a fresh grid and save it if a store is attached."""

        engine = cls(GridCore.fresh(palette, viewport_size, clock()), store=store, clock=clock)
        logger.info("Created grid %s (viewport_size=%s)", engine.id, viewport_size)
        engine.save()
        return engine

    @classmethod
    def from_json(cls, text: str, **kwargs: Any) -> Optional[GridEngine]:
        core = codec.from_json(text)
        if core is None:
            return None
        return cls(core, **kwargs)

    @property
    def core(self) -> GridCore:
        return self._core

    @property
    def id(self) -> str:
        return self._core.id

    @property
    def palette(self) -> List[str]:
        return list(self._core.palette)

    @property
    def viewport_size(self) -> int:
        return self._core.viewport_size

    @property
    def viewport_corner(self) -> Tuple[int, int]:
        return self._core.viewport_corner

    @property
    def page_size(self) -> int:
        return self._core.viewport.page_size

    @property
    def created_at(self) -> int:
        return self._core.created_at

    @property
    def updated_at(self) -> int:
        return self._core.updated_at

    # Reads use absolute coordinates.

    def value_at(self, x: int, y: int) -> CellLookup:
        return self._core.storage.value_at(x, y)

    def has_value(self, x: int, y: int) -> bool:
        return self._core.storage.has_value(x, y)

    def color_at(self, x: int, y: int) -> Optional[str]:
        return self._resolver.color_at(self._core.storage, x, y)

    def in_viewport(self, x: int, y: int) -> bool:
        return self._core.viewport.contains(x, y)

    def size(self) -> Tuple[int, int]:
        return self._core.storage.size()

    def visible_grid(self) -> List[List[Optional[str]]]:
        """Colors of the whole viewport, row by row."""

        x0, y0 = self.viewport_corner
        span = range(self.viewport_size)
        return [[self.color_at(x0 + ox, y0 + oy) for ox in span] for oy in span]

    def info(self) -> GridInfo:
        return GridInfo(size=self.size(), viewport_corner=self.viewport_corner)

    def to_json(self) -> str:
        return codec.to_json(self._core)

    # Mutations.

    def set_value(self, local_x: int, local_y: int, color_index: int) -> bool:
        """Paint a cell given viewport-local coordinates; ``True`` if accepted."""

        if color_index < 0:
            raise ValueError(f"color index must be non-negative, got {color_index}")

        x, y = self._core.viewport.to_absolute(local_x, local_y)
        if self.has_value(x, y):
            logger.debug("Cell (%s, %s) already painted; keeping first value", x, y)
            return False
        if not self.in_viewport(x, y):
            logger.debug("Cell (%s, %s) is outside the viewport", x, y)
            return False
        if x < 0 or y < 0:
            logger.debug("Cell (%s, %s) has a negative coordinate", x, y)
            return False

        self._core.storage.set(x, y, color_index)
        self._touch()
        persisted = self._persist()
        self._notifier.emit(
            GridChange(
                kind=CELL_PAINTED,
                grid_id=self.id,
                updated_at=self.updated_at,
                cell=(x, y),
                value=color_index,
                persisted=persisted,
            )
        )
        return True

    def move_viewport(self, dx: int, dy: int) -> bool:
        viewport = self._core.viewport.moved(dx, dy)
        if viewport is None:
            logger.debug("Rejected viewport move by (%s, %s) from %s", dx, dy, self.viewport_corner)
            return False

        self._core.viewport = viewport
        self._touch()
        persisted = self._persist()
        self._notifier.emit(
            GridChange(
                kind=VIEWPORT_MOVED,
                grid_id=self.id,
                updated_at=self.updated_at,
                viewport_corner=viewport.corner,
                persisted=persisted,
            )
        )
        return True

    def move_viewport_by_page(self, pages_x: int, pages_y: int) -> bool:
        return self.move_viewport(pages_x * self.page_size, pages_y * self.page_size)

    def replace(self, core: GridCore) -> None:
        """Swap in another grid, e.g. one pasted from an exchange document."""

        self._core = core
        self._resolver = PaletteResolver(core.palette, self._fallback_color)
        persisted = self._persist()
        logger.info("Replaced current grid with %s", core.id)
        self._notifier.emit(
            GridChange(
                kind=GRID_REPLACED,
                grid_id=core.id,
                updated_at=core.updated_at,
                viewport_corner=core.viewport_corner,
                persisted=persisted,
            )
        )

    def new_like(self) -> GridCore:
        """Fresh grid sharing this grid's palette and viewport size."""

        return GridCore.fresh(self._core.palette, self.viewport_size, self._clock())

    def save(self) -> bool:
        return self._persist()

    # Subscriptions.

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        return self._notifier.subscribe(listener)

    def unsubscribe(self, listener: ChangeListener) -> None:
        self._notifier.unsubscribe(listener)

    def _touch(self) -> None:
        self._core.updated_at = max(self._core.updated_at, self._clock())

    def _persist(self) -> bool:
        if self._store is None:
            return False
        started = time.perf_counter()
        try:
            self._store.save(self._core)
        except PersistenceError as exc:
            self.metrics.failed_saves += 1
            self.metrics.last_error = str(exc)
            logger.warning("Failed to save grid %s: %s", self.id, exc)
            return False
        self.metrics.saves += 1
        self.metrics.last_save_ms = round_to(elapsed_ms(started))
        logger.debug("Saved grid %s in %.2fms", self.id, self.metrics.last_save_ms)
        return True


__all__ = ["GridEngine", "GridInfo", "GridMetrics"]
