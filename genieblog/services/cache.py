"""Small TTL cache for loaded content snapshots."""

import time
from collections import OrderedDict
from typing import Any


class TTLCache:
    """In-memory cache with time-to-live and max-size eviction.

    Usage::

        cache = TTLCache(ttl=300, max_size=4)
        cache.set("content/blog/posts", snapshot)
        hit = cache.get("content/blog/posts")  # value, or None if expired/missing
    """

    def __init__(self, ttl: float = 300, max_size: int = 16) -> None:
        self._ttl = ttl
        self._max_size = max_size
        self._store: OrderedDict[str, tuple[Any, float]] = OrderedDict()

    def __len__(self) -> int:
        return len(self._store)

    def get(self, key: str) -> Any | None:
        """Return the value for *key* unless it is missing or older than the TTL."""
        entry = self._store.get(key)
        if entry is None:
            return None
        value, stored_at = entry
        if time.monotonic() - stored_at > self._ttl:
            del self._store[key]
            return None
        self._store.move_to_end(key)
        return value

    def set(self, key: str, value: Any) -> None:
        """Store *value*, evicting the least recently used entry when full."""
        self._store[key] = (value, time.monotonic())
        self._store.move_to_end(key)
        while len(self._store) > self._max_size:
            self._store.popitem(last=False)

    def invalidate(self, key: str) -> bool:
        """Drop *key*; returns whether anything was removed."""
        return self._store.pop(key, None) is not None

    def clear(self) -> None:
        self._store.clear()
