"""
Bounded translation cache.

Memoizes single-text translations keyed by (text, target, source). When the
cache is full the oldest *inserted* entry is dropped. Reads do not refresh
an entry's position, so this is FIFO eviction rather than LRU.
"""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)


AUTO_SOURCE = "auto"

CacheKey = tuple[str, str, str]


class TranslationCache:
    """
    Insertion-ordered, capacity-bounded key/value store.

    Usage:
        cache = TranslationCache(capacity=1000)
        key = TranslationCache.make_key("Hello", "es")

        if (hit := cache.get(key)) is None:
            cache.put(key, await backend.translate("Hello", "es"))
    """

    def __init__(self, capacity: int = 1000, enabled: bool = True):
        self.capacity = capacity
        self.enabled = enabled and capacity > 0
        # dict preserves insertion order; the first key is always the oldest
        self._entries: dict[Any, str] = {}
        self.hits = 0
        self.misses = 0

    @staticmethod
    def make_key(text: str, target: str, source: str | None = None) -> CacheKey:
        """Create cache key; an unknown source uses the "auto" sentinel."""
        return (text, target, source or AUTO_SOURCE)

    def get(self, key: Any) -> str | None:
        """Get cached value. Never changes eviction order."""
        if not self.enabled:
            return None

        value = self._entries.get(key)
        if value is None:
            self.misses += 1
        else:
            self.hits += 1
        return value

    def put(self, key: Any, value: str) -> None:
        """Store a value, evicting the oldest-inserted entry when full."""
        if not self.enabled:
            return

        if key in self._entries:
            # Overwrite keeps the original insertion slot
            self._entries[key] = value
            return

        if len(self._entries) >= self.capacity:
            oldest = next(iter(self._entries))
            del self._entries[oldest]
            logger.debug(f"Translation cache full ({self.capacity}), evicted oldest entry")

        self._entries[key] = value

    def clear(self) -> None:
        """Clear all entries and counters."""
        self._entries.clear()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Any) -> bool:
        return key in self._entries

    def __repr__(self) -> str:
        return f"<TranslationCache(size={len(self)}, capacity={self.capacity})>"
