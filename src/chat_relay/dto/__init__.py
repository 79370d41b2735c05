"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
Internal logic uses entities from the entities package.
"""

from .requests import SendMessageRequest
from .responses import (
    CacheStatsResponse,
    ConversationResponse,
    HealthCheckResponse,
    MessageItem,
    SendMessageResponse,
)

__all__ = [
    "SendMessageRequest",
    "MessageItem",
    "ConversationResponse",
    "SendMessageResponse",
    "CacheStatsResponse",
    "HealthCheckResponse",
]
