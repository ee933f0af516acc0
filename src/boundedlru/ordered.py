"""LRU cache backed by an access-ordered ``OrderedDict``."""

from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Generic, TypeVar

from boundedlru.cache import check_capacity, render_items

K = TypeVar("K")
V = TypeVar("V")

logger = logging.getLogger("boundedlru.ordered")


class OrderedLRUCache(Generic[K, V]):
    """Drop-in alternative to BoundedLRUCache.

    The dict keeps the least-recently-used key first and the most recent one
    last; `keys()` and `items()` reverse that so both caches report the same
    order.
    """

    def __init__(self, capacity: int) -> None:
        self._capacity = check_capacity(capacity)
        self._data: OrderedDict[K, V] = OrderedDict()
        self._last_evicted: K | None = None

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def last_evicted(self) -> K | None:
        return self._last_evicted

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __repr__(self) -> str:
        return f"{type(self).__name__}(capacity={self._capacity}, size={len(self._data)})"

    def get(self, key: K, default: V | None = None) -> V | None:
        if key not in self._data:
            return default
        self._data.move_to_end(key)
        return self._data[key]

    def lookup(self, key: K) -> tuple[bool, V | None]:
        if key not in self._data:
            return False, None
        self._data.move_to_end(key)
        return True, self._data[key]

    def put(self, key: K, value: V) -> None:
        self._last_evicted = None
        if key in self._data:
            self._data.move_to_end(key)
        self._data[key] = value
        if len(self._data) > self._capacity:
            evicted, _ = self._data.popitem(last=False)
            self._last_evicted = evicted
            logger.debug("evicted %r (capacity=%d)", evicted, self._capacity)

    def peek(self, key: K, default: V | None = None) -> V | None:
        return self._data.get(key, default)

    def keys(self) -> list[K]:
        return list(reversed(self._data.keys()))

    def items(self) -> list[tuple[K, V]]:
        return list(reversed(self._data.items()))

    def render(self) -> str:
        return render_items(self.items())
