"""Repository layer for data access.

This layer hides external dependencies (the completion API, the cache
backing store) behind protocol-based interfaces. Any class implementing
the required methods satisfies the protocol.
"""

from chat_relay.protocols import CacheStore, CompletionProvider

from .memory_cache import InMemoryResponseCache
from .openai_client import OpenAICompletionClient

__all__ = [
    "CacheStore",
    "CompletionProvider",
    "InMemoryResponseCache",
    "OpenAICompletionClient",
]
