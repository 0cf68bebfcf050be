"""Logging helpers."""
from __future__ import annotations

import logging
from typing import Union


def setup_logging(level: Union[int, str] = logging.INFO, *, force: bool = False) -> None:
    """Configure root logger with a simple format.

    ``level`` may be a number or a level name such as ``"debug"``.
    """

    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        force=force,
    )


__all__ = ["setup_logging"]
