"""Simple TTL-based cache for geocoding results."""

import asyncio
import time
from typing import Generic, TypeVar

K = TypeVar("K")
V = TypeVar("V")


class TTLCache(Generic[K, V]):
    """Keyed TTL cache.

    Stores values per key with time-based expiration. Uses an async lock
    to prevent concurrent lookups of the same provider.
    """

    def __init__(self, ttl: float = 3600.0):
        """Initialize the cache.

        Args:
            ttl: Time-to-live in seconds for cached values.
        """
        self._ttl = ttl
        self._entries: dict[K, tuple[V, float]] = {}
        self._lock = asyncio.Lock()

    def get(self, key: K) -> V | None:
        """Get the cached value for a key if it hasn't expired.

        Returns:
            The cached value if valid, None if expired or not set.
        """
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if time.monotonic() < expires_at:
            return value
        del self._entries[key]
        return None

    def set(self, key: K, value: V) -> None:
        """Set a value in the cache with TTL."""
        self._entries[key] = (value, time.monotonic() + self._ttl)

    def clear(self) -> None:
        """Clear all cached values."""
        self._entries.clear()

    @property
    def ttl(self) -> float:
        """Time-to-live in seconds applied to new entries."""
        return self._ttl

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def lock(self) -> asyncio.Lock:
        """Get the async lock for coordinating lookups."""
        return self._lock
