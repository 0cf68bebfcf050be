"""Small helpers for list-backed ordered sets."""
from __future__ import annotations

from typing import Hashable, Iterable, List, TypeVar

T = TypeVar("T", bound=Hashable)


def remove_duplicates(items: Iterable[T]) -> List[T]:
    """Drop repeated items, keeping the first occurrence of each."""

    return list(dict.fromkeys(items))


def add_to_set_front(items: Iterable[T], element: T) -> List[T]:
    """Return ``items`` with ``element`` moved (or added) to the front."""

    return remove_duplicates([element, *items])


__all__ = ["remove_duplicates", "add_to_set_front"]
