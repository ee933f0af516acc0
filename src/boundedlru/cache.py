"""Fixed-capacity LRU cache built from a dict index and a doubly linked list.

The index maps each key to its list entry. The list runs from the
most-recently-used entry (just after ``head``) to the least-recently-used one
(just before ``tail``). Both sentinels are allocated once and never carry a
real key or value, so linking and unlinking never branch on empty lists or
list ends.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import Any, Generic, TypeVar

from boundedlru.errors import InvalidCapacityError

K = TypeVar("K")
V = TypeVar("V")

logger = logging.getLogger("boundedlru.cache")


def check_capacity(capacity: Any) -> int:
    """Return `capacity` if it is a positive int, else raise InvalidCapacityError."""

    if not isinstance(capacity, int) or isinstance(capacity, bool):
        raise InvalidCapacityError(f"Capacity must be an integer, got {capacity!r}.")
    if capacity <= 0:
        raise InvalidCapacityError(f"Capacity must be positive, got {capacity}.")
    return capacity


def render_items(items: Iterable[tuple[Any, Any]]) -> str:
    """Render (key, value) pairs as ``head <-> [k,v] <-> ... <-> tail``."""

    parts = ["head", *(f"[{k},{v}]" for k, v in items), "tail"]
    return " <-> ".join(parts)


class _Entry:
    __slots__ = ("key", "value", "prev", "next")

    def __init__(self, key: Any = None, value: Any = None) -> None:
        self.key = key
        self.value = value
        # Linked on insertion; only a detached entry holds None here.
        self.prev: _Entry = None  # type: ignore[assignment]
        self.next: _Entry = None  # type: ignore[assignment]


class BoundedLRUCache(Generic[K, V]):
    """LRU cache with O(1) expected-time `get` and `put`.

    A hit on either operation promotes the entry to most-recently-used. A
    `put` that adds a new key beyond `capacity` evicts exactly one entry, the
    least-recently-used one. A miss on `get` changes nothing.
    """

    def __init__(self, capacity: int) -> None:
        self._capacity = check_capacity(capacity)
        self._index: dict[K, _Entry] = {}
        self._head = _Entry()
        self._tail = _Entry()
        self._head.next = self._tail
        self._tail.prev = self._head
        self._last_evicted: K | None = None

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def last_evicted(self) -> K | None:
        """Key evicted by the most recent `put`, or None if it evicted nothing."""
        return self._last_evicted

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def __repr__(self) -> str:
        return f"{type(self).__name__}(capacity={self._capacity}, size={len(self._index)})"

    # --- list primitives -------------------------------------------------

    def _unlink(self, entry: _Entry) -> None:
        entry.prev.next = entry.next
        entry.next.prev = entry.prev

    def _link_front(self, entry: _Entry) -> None:
        first = self._head.next
        entry.next = first
        first.prev = entry
        self._head.next = entry
        entry.prev = self._head

    def _promote(self, entry: _Entry) -> None:
        self._unlink(entry)
        self._link_front(entry)

    def _evict(self) -> K:
        # size > capacity >= 1, so the tail's neighbour is a real entry.
        victim = self._tail.prev
        self._unlink(victim)
        del self._index[victim.key]
        return victim.key

    # --- public API ------------------------------------------------------

    def get(self, key: K, default: V | None = None) -> V | None:
        """Return the value for `key` and mark it most-recently-used.

        On a miss, return `default` and leave the cache untouched. Pass
        ``default=-1`` for the classic integer-valued convention.
        """

        entry = self._index.get(key)
        if entry is None:
            return default
        self._promote(entry)
        return entry.value

    def lookup(self, key: K) -> tuple[bool, V | None]:
        """Like `get`, but report presence explicitly as ``(found, value)``."""

        entry = self._index.get(key)
        if entry is None:
            return False, None
        self._promote(entry)
        return True, entry.value

    def put(self, key: K, value: V) -> None:
        """Insert or update `key`, evicting the LRU entry when over capacity."""

        self._last_evicted = None
        entry = self._index.get(key)
        if entry is not None:
            entry.value = value
            self._promote(entry)
            return

        entry = _Entry(key, value)
        self._index[key] = entry
        self._link_front(entry)

        if len(self._index) > self._capacity:
            evicted = self._evict()
            self._last_evicted = evicted
            logger.debug("evicted %r (capacity=%d)", evicted, self._capacity)

    def peek(self, key: K, default: V | None = None) -> V | None:
        """Return the value for `key` without changing its recency."""

        entry = self._index.get(key)
        return default if entry is None else entry.value

    def _iter_entries(self) -> Iterator[_Entry]:
        cur = self._head.next
        while cur is not self._tail:
            yield cur
            cur = cur.next

    def keys(self) -> list[K]:
        """Keys from most- to least-recently-used."""
        return [e.key for e in self._iter_entries()]

    def items(self) -> list[tuple[K, V]]:
        return [(e.key, e.value) for e in self._iter_entries()]

    def render(self) -> str:
        return render_items(self.items())
