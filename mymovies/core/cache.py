"""
In-process key/value cache with per-entry expiry.

Entries are evicted lazily: reading an expired key is a miss and drops
it. Expired entries are also swept in bulk on ``set`` once
``sweep_interval`` seconds have passed since the previous sweep, which
keeps the map from accumulating dead keys that are never read again.
There is no size bound.

The cache is shared by request threads without a lock. Values are never
mutated after insertion and concurrent writers store equivalent values,
so a lost update only costs one extra upstream call.
"""

import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional


@dataclass(frozen=True)
class CacheEntry:
    value: Any
    expires_at: float


class TTLCache:
    """
    Key/value store with per-entry time-to-live.

    Args:
        sweep_interval: Minimum seconds between bulk sweeps of expired
            entries; None disables sweeping on write
        clock: Monotonic time source (overridable in tests)
    """

    def __init__(
        self,
        sweep_interval: Optional[float] = 300.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._entries: Dict[str, CacheEntry] = {}
        self._clock = clock
        self._sweep_interval = sweep_interval
        self._last_sweep = clock()

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None on a miss or expiry."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() > entry.expires_at:
            self._entries.pop(key, None)
            return None
        return entry.value

    def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        """Store ``value`` under ``key`` for ``ttl_seconds``."""
        now = self._clock()
        self._entries[key] = CacheEntry(value=value, expires_at=now + ttl_seconds)
        if self._sweep_interval is not None and now - self._last_sweep >= self._sweep_interval:
            self.clear_expired()

    def clear(self) -> None:
        """Remove every entry."""
        self._entries.clear()

    def clear_expired(self) -> int:
        """
        Remove expired entries.

        Returns:
            Number of entries removed
        """
        now = self._clock()
        self._last_sweep = now
        removed = 0
        for key, entry in list(self._entries.items()):
            if now > entry.expires_at:
                self._entries.pop(key, None)
                removed += 1
        return removed

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None
