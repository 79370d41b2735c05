"""In-memory implementation of CacheStore.

Entries expire after a time-to-live. Expiry is enforced two ways:
every lookup checks the entry's expiry instant, and when an asyncio
event loop is running each store schedules an eviction timer so idle
entries do not accumulate.
"""

import asyncio
import logging
import time
from collections.abc import Callable

from chat_relay.config import settings
from chat_relay.entities import CacheEntry, CacheKey

logger = logging.getLogger(__name__)


class InMemoryResponseCache:
    """Process-local response cache with per-entry eviction timers.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.

    One instance is meant to be built at startup and passed to whatever
    issues completion requests. Reads and writes are not synchronized;
    concurrent stores to the same key resolve as last-store-wins.

    Example:
        ```python
        cache = InMemoryResponseCache.create(ttl=300)
        cache.store(CacheKey("", "Hello"), "Hi there!")
        cache.lookup(CacheKey("", "Hello"))  # "Hi there!"
        ```
    """

    def __init__(
        self,
        ttl: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the cache.

        Args:
            ttl: Default time-to-live in seconds. Defaults to settings.
            clock: Monotonic clock used for expiry checks.
        """
        self._ttl = settings.cache_ttl if ttl is None else ttl
        self._clock = clock
        self._entries: dict[CacheKey, CacheEntry] = {}
        self._timers: dict[CacheKey, asyncio.TimerHandle] = {}
        self._hits = 0
        self._misses = 0

    @classmethod
    def create(cls, ttl: float | None = None) -> "InMemoryResponseCache":
        """Factory method to create InMemoryResponseCache with defaults.

        Args:
            ttl: Time-to-live in seconds. If None, uses settings.

        Returns:
            Configured InMemoryResponseCache
        """
        return cls(ttl=ttl)

    @property
    def ttl(self) -> float:
        """Get the default time-to-live in seconds."""
        return self._ttl

    def lookup(self, key: CacheKey) -> str | None:
        """Return the cached text for a key if present and not expired.

        Args:
            key: The query key

        Returns:
            The cached text, or None on a miss
        """
        entry = self._entries.get(key)
        if entry is not None and entry.is_expired(self._clock()):
            self._remove(key)
            entry = None

        if entry is None:
            self._misses += 1
            logger.debug("Cache miss for %r", key.user_message[:50])
            return None

        self._hits += 1
        logger.debug("Cache hit for %r", key.user_message[:50])
        return entry.text

    def store(self, key: CacheKey, text: str, ttl: float | None = None) -> None:
        """Insert or overwrite the entry for a key.

        A previous entry's eviction timer is cancelled, so only the newest
        entry's removal ever applies.

        Args:
            key: The query key
            text: The completion text
            ttl: Time-to-live in seconds. Defaults to the cache TTL.
        """
        ttl = self._ttl if ttl is None else ttl
        entry = CacheEntry(text=text, expires_at=self._clock() + ttl)

        self._cancel_timer(key)
        self._entries[key] = entry

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No loop to run timers on: fall back to sweeping on write.
            self._purge_expired()
            return

        self._timers[key] = loop.call_later(ttl, self._evict, key, entry)

    def delete(self, key: CacheKey) -> bool:
        """Delete the entry for a key.

        Args:
            key: The query key

        Returns:
            True if an entry was removed, False otherwise
        """
        return self._remove(key)

    def clear(self) -> int:
        """Clear all entries and cancel their eviction timers.

        Returns:
            Number of entries deleted
        """
        for handle in self._timers.values():
            handle.cancel()
        count = len(self._entries)
        self._timers.clear()
        self._entries.clear()
        return count

    def count(self) -> int:
        """Count unexpired entries.

        Returns:
            Number of live entries
        """
        self._purge_expired()
        return len(self._entries)

    def get_stats(self) -> dict:
        """Get cache statistics.

        Returns:
            Dictionary with entry count, TTL, hits, misses and pending timers
        """
        return {
            "total_entries": self.count(),
            "ttl": self._ttl,
            "hits": self._hits,
            "misses": self._misses,
            "pending_evictions": len(self._timers),
        }

    def _evict(self, key: CacheKey, entry: CacheEntry) -> None:
        # Only remove the entry this timer was scheduled for.
        if self._entries.get(key) is entry:
            del self._entries[key]
            self._timers.pop(key, None)
            logger.debug("Evicted cache entry for %r", key.user_message[:50])

    def _remove(self, key: CacheKey) -> bool:
        self._cancel_timer(key)
        return self._entries.pop(key, None) is not None

    def _cancel_timer(self, key: CacheKey) -> None:
        handle = self._timers.pop(key, None)
        if handle is not None:
            handle.cancel()

    def _purge_expired(self) -> None:
        now = self._clock()
        for key in [k for k, e in self._entries.items() if e.is_expired(now)]:
            self._remove(key)
