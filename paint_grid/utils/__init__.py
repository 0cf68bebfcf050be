"""Utilities for logging, timing and ordered sets."""
from .ordered_set import add_to_set_front, remove_duplicates
from .logging_utils import setup_logging
from .metrics import elapsed_ms, round_to

__all__ = ["setup_logging", "round_to", "elapsed_ms", "add_to_set_front", "remove_duplicates"]
