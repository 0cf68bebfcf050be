"""State management helpers."""
from .state_store import InMemoryKeyValueStore, JSONFileKeyValueStore, KeyValueStore, PersistenceError
from .grid_store import GridStore

__all__ = ["KeyValueStore", "InMemoryKeyValueStore", "JSONFileKeyValueStore", "PersistenceError", "GridStore"]
