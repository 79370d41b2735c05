"""Response cache domain entities."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CacheKey:
    """Composite key identifying a completion query.

    Two requests with the same system prompt and user message are
    considered identical queries.

    Attributes:
        system_prompt: The system prompt sent with the query (may be empty)
        user_message: The user's message text
    """

    system_prompt: str
    user_message: str


@dataclass(frozen=True, eq=False)
class CacheEntry:
    """A cached completion and the instant it expires.

    Entries compare by identity so an eviction callback can tell the
    entry it was scheduled for apart from a newer one under the same key.

    Attributes:
        text: The cached completion text
        expires_at: Expiry instant on the cache's clock (seconds)
    """

    text: str
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at
