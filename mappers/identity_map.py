"""
mappers/identity_map.py
-----------------------
Per-entity-type cache guaranteeing one in-memory instance per row id.
"""

from threading import RLock
from typing import Callable, Generic, Mapping, Optional, TypeVar

T = TypeVar("T")


class IdentityMap(Generic[T]):
    """
    Maps row ids to the canonical instance for that row.

    Every mapper owns exactly one map, created with the mapper (or injected
    by ``MapperRegistry``); nothing is shared through module or class state.
    The map never touches storage. All operations hold one re-entrant lock,
    so concurrent callers still see "same id => same instance". There is no
    eviction: the map keeps everything loaded until ``remove`` or ``reset``.
    """

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._entries: dict[int, T] = {}
        self._lock = RLock()

    def get(self, entity_id: int) -> Optional[T]:
        with self._lock:
            return self._entries.get(entity_id)

    def put(self, entity_id: int, instance: T) -> None:
        """Insert or overwrite the instance cached for ``entity_id``."""
        with self._lock:
            self._entries[entity_id] = instance

    def get_or_put(self, entity_id: int, factory: Callable[[], T]) -> T:
        """
        Return the cached instance, or build one with ``factory`` and cache it.

        The lookup and the insert happen under one lock acquisition, so two
        threads hydrating the same row end up holding the same object.
        """
        with self._lock:
            instance = self._entries.get(entity_id)
            if instance is None:
                instance = factory()
                self._entries[entity_id] = instance
            return instance

    def remove(self, entity_id: int) -> Optional[T]:
        with self._lock:
            return self._entries.pop(entity_id, None)

    def is_empty(self) -> bool:
        with self._lock:
            return not self._entries

    def reset(self) -> None:
        """Drop every entry."""
        with self._lock:
            self._entries.clear()

    def replace(self, entries: Mapping[int, T]) -> None:
        """Reset, then load ``entries``, as one step."""
        with self._lock:
            self._entries = dict(entries)

    def ids(self) -> set[int]:
        with self._lock:
            return set(self._entries)

    def __contains__(self, entity_id: object) -> bool:
        with self._lock:
            return entity_id in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __repr__(self) -> str:
        return f"IdentityMap({self.name!r}, size={len(self)})"
