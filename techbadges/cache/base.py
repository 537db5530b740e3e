"""Base class for backing caches.

A backing cache stores string values under string keys with an optional
time-to-live. The server uses it to keep generated SVG documents; any
backend that satisfies this interface can be swapped in.
"""

from abc import ABC, abstractmethod
from typing import Optional


class CacheBackend(ABC):
    """Key/value store with optional TTL."""

    name = "cache"

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None if missing or expired."""
        pass

    @abstractmethod
    async def put(self, key: str, value: str, ttl: Optional[int] = None) -> None:
        """Store a value.

        Args:
            key: Cache key
            value: Value to store
            ttl: Seconds until expiry; None keeps it until evicted
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove a value. Deleting a missing key is not an error."""
        pass

    async def close(self) -> None:
        """Release any connections held by the backend."""
        return None
