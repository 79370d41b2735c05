"""Response cache storage protocol.

Defines the interface for any backend that can hold completion texts
keyed by (system prompt, user message) for a limited time.
"""

from typing import Protocol, runtime_checkable

from chat_relay.entities import CacheKey


@runtime_checkable
class CacheStore(Protocol):
    """Protocol for response cache backends.

    Any type that implements these methods satisfies the protocol,
    no explicit inheritance needed.

    Example:
        ```python
        from chat_relay.protocols import CacheStore

        cache: CacheStore = InMemoryResponseCache()
        ```
    """

    def lookup(self, key: CacheKey) -> str | None:
        """Return the cached text for a key.

        Args:
            key: The query key

        Returns:
            The cached text if present and not expired, None otherwise
        """
        ...

    def store(self, key: CacheKey, text: str, ttl: float | None = None) -> None:
        """Insert or overwrite an entry.

        Args:
            key: The query key
            text: The completion text to cache
            ttl: Time-to-live in seconds (backend default if None)
        """
        ...

    def delete(self, key: CacheKey) -> bool:
        """Delete the entry for a key.

        Args:
            key: The query key

        Returns:
            True if deleted, False otherwise
        """
        ...

    def clear(self) -> int:
        """Clear all entries.

        Returns:
            Number of entries deleted
        """
        ...

    def count(self) -> int:
        """Count live entries.

        Returns:
            Number of unexpired entries
        """
        ...

    def get_stats(self) -> dict:
        """Get backend statistics.

        Returns:
            Dictionary with stats (implementation-specific)
        """
        ...
