"""Protocol interfaces for swappable implementations.

Protocols enable:
- Swapping the cache backend or completion provider
- Unit testing with fake implementations
"""

from .cache_store import CacheStore
from .completion_provider import CompletionProvider

__all__ = [
    "CacheStore",
    "CompletionProvider",
]
