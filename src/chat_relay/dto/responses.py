"""Response DTOs for API endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field


class MessageItem(BaseModel):
    """Single conversation message."""

    content: str = Field(..., description="The message text")
    is_user: bool = Field(..., description="True for user messages, False for bot replies")
    timestamp: datetime = Field(..., description="When the message was appended (UTC)")


class ConversationResponse(BaseModel):
    """Response DTO for the conversation listing."""

    messages: list[MessageItem] = Field(
        default_factory=list,
        description="Messages in insertion order",
    )
    is_loading: bool = Field(..., description="Whether a send is outstanding")


class SendMessageResponse(BaseModel):
    """Response DTO for a submitted message.

    A failed dispatch still yields a reply: the fixed fallback text.
    """

    reply: MessageItem = Field(..., description="The bot reply appended to the conversation")
    messages: list[MessageItem] = Field(
        default_factory=list,
        description="The full conversation after the reply",
    )


class CacheStatsResponse(BaseModel):
    """Response DTO for cache statistics."""

    total_entries: int = Field(..., description="Number of live cache entries", ge=0)
    ttl_seconds: float = Field(..., description="Time-to-live for cache entries in seconds", ge=0)
    hits: int = Field(0, description="Cache hits since startup", ge=0)
    misses: int = Field(0, description="Cache misses since startup", ge=0)


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'degraded'")
    cache_healthy: bool = Field(..., description="Whether the response cache is usable")
    credential_configured: bool = Field(
        ...,
        description="Whether an API credential is configured",
    )
