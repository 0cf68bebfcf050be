"""Utility helpers for timing measurements."""
from __future__ import annotations

import time


def round_to(value: float, places: int = 2) -> float:
    """Round ``value`` to ``places`` decimal places."""

    return round(value, places)


def elapsed_ms(started: float) -> float:
    """Milliseconds since ``started``, a :func:`time.perf_counter` reading."""

    return (time.perf_counter() - started) * 1000


__all__ = ["round_to", "elapsed_ms"]
