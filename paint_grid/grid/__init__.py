"""Grid package exports."""
from .core import GridCore, make_grid_id
from .engine import GridEngine, GridInfo, GridMetrics
from .events import GridChange
from .palette import OUT_OF_PALETTE_COLOR, PaletteResolver
from .storage import OUT_OF_BOUNDS, UNSET, CellLookup, CellStatus, SparseStorage
from .viewport import MIN_CORNER, Viewport

__all__ = [
    "GridCore",
    "make_grid_id",
    "GridEngine",
    "GridInfo",
    "GridMetrics",
    "GridChange",
    "OUT_OF_PALETTE_COLOR",
    "PaletteResolver",
    "OUT_OF_BOUNDS",
    "UNSET",
    "CellLookup",
    "CellStatus",
    "SparseStorage",
    "MIN_CORNER",
    "Viewport",
]
