"""Color index resolution."""
from __future__ import annotations

from typing import List, Optional, Sequence

from .storage import SparseStorage

# Reserved for indices that point past the end of the palette.
OUT_OF_PALETTE_COLOR = "magenta"


class PaletteResolver:
    """Maps stored color indices to display colors."""

    def __init__(self, palette: Sequence[str], fallback: str = OUT_OF_PALETTE_COLOR) -> None:
        self._palette: List[str] = list(palette)
        self._fallback = fallback

    @property
    def palette(self) -> List[str]:
        return list(self._palette)

    def resolve(self, index: int) -> str:
        if 0 <= index < len(self._palette):
            return self._palette[index]
        return self._fallback

    def color_at(self, storage: SparseStorage, x: int, y: int) -> Optional[str]:
        """Return the color painted at ``(x, y)``, or ``None`` when nothing is there."""

        lookup = storage.value_at(x, y)
        if not lookup.is_painted or lookup.value is None:
            return None
        return self.resolve(lookup.value)


__all__ = ["OUT_OF_PALETTE_COLOR", "PaletteResolver"]
