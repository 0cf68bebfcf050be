"""Configuration helpers for the paint grid."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import List

DEFAULT_PALETTE = ["yellow", "blue", "red"]


@dataclass
class Settings:
    """Runtime settings loaded from environment variables."""

    viewport_size: int = 8
    palette: List[str] = field(default_factory=lambda: list(DEFAULT_PALETTE))
    store_path: Path = Path("data/grids.json")
    log_level: str = "WARNING"


def parse_palette(value: str) -> List[str]:
    """Split a comma separated palette, dropping blank entries."""

    return [color.strip() for color in value.split(",") if color.strip()]


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Load settings from environment variables once per process."""

    viewport_size = int(os.getenv("PAINT_GRID_VIEWPORT_SIZE", "8"))
    if viewport_size < 1:
        raise ValueError("PAINT_GRID_VIEWPORT_SIZE must be a positive integer")

    palette = parse_palette(os.getenv("PAINT_GRID_PALETTE", ""))

    return Settings(
        viewport_size=viewport_size,
        palette=palette or list(DEFAULT_PALETTE),
        store_path=Path(os.getenv("PAINT_GRID_STORE_PATH", "data/grids.json")),
        log_level=os.getenv("PAINT_GRID_LOG_LEVEL", "WARNING"),
    )


__all__ = ["Settings", "DEFAULT_PALETTE", "parse_palette", "load_settings"]
