"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services
and repositories. They are NOT used for API contracts - use DTOs
from the dto package for that.
"""

from .cache_entry import CacheEntry, CacheKey
from .message import Message

__all__ = ["CacheEntry", "CacheKey", "Message"]
