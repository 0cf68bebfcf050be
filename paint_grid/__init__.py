"""Sparse, windowed, persistent paint grid."""
from .grid import GridCore, GridEngine
from .state import GridStore

__all__ = ["GridCore", "GridEngine", "GridStore"]
