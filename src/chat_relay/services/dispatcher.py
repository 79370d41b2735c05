"""Dispatcher for outbound completion requests.

The dispatcher answers from the response cache when it can and
otherwise issues exactly one completion request, caching the result.
"""

import logging

from chat_relay.config import settings
from chat_relay.entities import CacheKey
from chat_relay.exceptions import CompletionError
from chat_relay.protocols import CacheStore, CompletionProvider

logger = logging.getLogger(__name__)


class Dispatcher:
    """Cache-first completion dispatcher.

    This service depends on PROTOCOLS, not concrete implementations:
    - CacheStore: in-memory by default
    - CompletionProvider: OpenAI-compatible API by default

    The dispatcher performs no input validation and no retries. It does
    not enforce the client-side timeout either; callers race ``send``
    against their own deadline.

    Example:
        ```python
        dispatcher = Dispatcher.create(
            cache=InMemoryResponseCache.create(),
            provider=OpenAICompletionClient.create(),
        )
        text = await dispatcher.send("Hello")
        ```
    """

    def __init__(
        self,
        cache: CacheStore,
        provider: CompletionProvider,
        ttl: float | None = None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            cache: Response cache shared by every send (required).
            provider: Completion service used on cache misses (required).
            ttl: Time-to-live for stored completions. Defaults to settings.
        """
        self._cache = cache
        self._provider = provider
        self._ttl = settings.cache_ttl if ttl is None else ttl

    @classmethod
    def create(
        cls,
        cache: CacheStore,
        provider: CompletionProvider,
        ttl: float | None = None,
    ) -> "Dispatcher":
        """Factory method to create Dispatcher with sensible defaults.

        Args:
            cache: Response cache (required).
            provider: Completion service (required).
            ttl: Time-to-live in seconds. If None, uses settings.

        Returns:
            Configured Dispatcher instance
        """
        return cls(cache=cache, provider=provider, ttl=ttl)

    async def send(self, user_message: str, system_prompt: str = "") -> str:
        """Return the completion for a message, from cache when possible.

        Business logic:
        1. Look up (system_prompt, user_message) in the cache
        2. On a hit, return the cached text with no network call
        3. On a miss, issue a single completion request
        4. Store the completion with the configured TTL and return it

        Args:
            user_message: The user's message (not validated here)
            system_prompt: The system prompt sent with the message

        Returns:
            The completion text

        Raises:
            CompletionError: If the completion request fails
        """
        key = CacheKey(system_prompt=system_prompt, user_message=user_message)

        cached = self._cache.lookup(key)
        if cached is not None:
            logger.debug("Using cached response")
            return cached

        try:
            text = await self._provider.complete(user_message, system_prompt)
        except CompletionError:
            logger.error("Completion request failed for model %s", self._provider.model_name)
            raise

        self._cache.store(key, text, ttl=self._ttl)
        return text

    @property
    def cache(self) -> CacheStore:
        """Get the underlying cache (for testing)."""
        return self._cache

    @property
    def provider(self) -> CompletionProvider:
        """Get the underlying completion provider (for testing)."""
        return self._provider
