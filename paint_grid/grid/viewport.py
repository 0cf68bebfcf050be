"""Square editing window over the unbounded grid plane."""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Tuple

MIN_CORNER = -1


@dataclass(frozen=True)
class Viewport:
    """Window of ``size`` x ``size`` cells whose top-left cell is ``(x, y)``.

    Consecutive pages overlap by one cell, so ``page_size`` is ``size - 1``.
    The corner never goes below ``MIN_CORNER`` on either axis.
    """

    size: int
    x: int = MIN_CORNER
    y: int = MIN_CORNER

    def __post_init__(self) -> None:
        if self.size < 1:
            raise ValueError(f"viewport size must be positive, got {self.size}")
        if self.x < MIN_CORNER or self.y < MIN_CORNER:
            raise ValueError(f"viewport corner ({self.x}, {self.y}) is below {MIN_CORNER}")

    @property
    def corner(self) -> Tuple[int, int]:
        return self.x, self.y

    @property
    def page_size(self) -> int:
        return self.size - 1

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.x + self.size and self.y <= y < self.y + self.size

    def to_absolute(self, local_x: int, local_y: int) -> Tuple[int, int]:
        return self.x + local_x, self.y + local_y

    def moved(self, dx: int, dy: int) -> Optional[Viewport]:
        """Return the shifted window, or ``None`` if it would cross the corner floor."""

        x, y = self.x + dx, self.y + dy
        if x < MIN_CORNER or y < MIN_CORNER:
            return None
        return replace(self, x=x, y=y)

    def moved_by_page(self, pages_x: int, pages_y: int) -> Optional[Viewport]:
        return self.moved(pages_x * self.page_size, pages_y * self.page_size)


__all__ = ["MIN_CORNER", "Viewport"]
