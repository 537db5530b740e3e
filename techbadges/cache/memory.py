"""In-process cache backend."""

import time
from collections import OrderedDict
from typing import Callable, Optional

from techbadges.cache.base import CacheBackend


class MemoryCache(CacheBackend):
    """Dictionary-backed cache with per-entry expiry.

    When max_entries is reached the oldest entry is evicted.
    """

    name = "memory"

    def __init__(self, max_entries: Optional[int] = None, clock: Callable[[], float] = time.monotonic):
        self.max_entries = max_entries
        self._clock = clock
        self._entries: OrderedDict[str, tuple[str, Optional[float]]] = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    async def get(self, key: str) -> Optional[str]:
        entry = self._entries.get(key)
        if entry is None:
            return None

        value, expires_at = entry
        if expires_at is not None and self._clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    async def put(self, key: str, value: str, ttl: Optional[int] = None) -> None:
        expires_at = self._clock() + ttl if ttl is not None else None
        self._entries.pop(key, None)
        self._entries[key] = (value, expires_at)

        if self.max_entries is not None:
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)

    async def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()
