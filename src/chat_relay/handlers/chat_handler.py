"""HTTP handlers for chat operations.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like status codes, validation, and error handling.
"""

import logging

from fastapi import HTTPException, status

from chat_relay.dto import (
    CacheStatsResponse,
    ConversationResponse,
    HealthCheckResponse,
    MessageItem,
    SendMessageRequest,
    SendMessageResponse,
)
from chat_relay.entities import Message
from chat_relay.exceptions import SessionBusyError
from chat_relay.protocols import CacheStore
from chat_relay.services import ChatSession

logger = logging.getLogger(__name__)


def to_item(message: Message) -> MessageItem:
    """Convert a Message entity to its DTO."""
    return MessageItem(
        content=message.content,
        is_user=message.is_user,
        timestamp=message.timestamp,
    )


class ChatHandler:
    """HTTP handlers for chat operations.

    This handler delegates to ChatSession and the response cache and
    handles HTTP-specific concerns like:
    - Converting entities to DTOs
    - Rejecting blank input and overlapping sends
    - Error handling and responses

    Dispatch failures are not HTTP errors: the session has already
    appended the fallback reply, which is returned with 200.
    """

    def __init__(
        self,
        session: ChatSession,
        cache: CacheStore,
        credential_configured: bool = True,
    ) -> None:
        """Initialize the chat handler.

        Args:
            session: The chat session for conversation logic (required).
            cache: The response cache shared with the dispatcher (required).
            credential_configured: Whether an API credential is set.
        """
        self._session = session
        self._cache = cache
        self._credential_configured = credential_configured

    async def get_messages(self) -> ConversationResponse:
        """Handle GET /messages requests."""
        return ConversationResponse(
            messages=[to_item(m) for m in self._session.messages],
            is_loading=self._session.is_loading,
        )

    async def send_message(self, request: SendMessageRequest) -> SendMessageResponse:
        """Handle POST /messages requests.

        Args:
            request: The send message request DTO

        Returns:
            SendMessageResponse with the bot reply and conversation

        Raises:
            HTTPException: 400 for blank content, 409 while a send is
                outstanding, 500 for unexpected failures
        """
        if not request.content.strip():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Message content must not be empty",
            )

        try:
            reply = await self._session.submit(request.content)
        except SessionBusyError as e:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=str(e),
            ) from e
        except Exception as e:
            logger.exception("Unexpected error while sending message")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to send message: {e}",
            ) from e

        return SendMessageResponse(
            reply=to_item(reply),
            messages=[to_item(m) for m in self._session.messages],
        )

    async def get_stats(self) -> CacheStatsResponse:
        """Handle GET /cache/stats requests.

        Raises:
            HTTPException: If an error occurs while fetching stats
        """
        try:
            stats = self._cache.get_stats()

            return CacheStatsResponse(
                total_entries=stats.get("total_entries", 0),
                ttl_seconds=stats.get("ttl", 0),
                hits=stats.get("hits", 0),
                misses=stats.get("misses", 0),
            )

        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to get stats: {e}",
            ) from e

    async def clear_cache(self) -> dict:
        """Handle DELETE /cache requests.

        Returns:
            Dict with clear operation result
        """
        count = self._cache.clear()
        logger.info("Cleared %d cache entries", count)

        return {
            "success": True,
            "deleted_count": count,
            "message": "Cache cleared successfully",
        }

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests."""
        try:
            self._cache.count()
            cache_healthy = True
        except Exception:
            logger.exception("Response cache health check failed")
            cache_healthy = False

        is_healthy = cache_healthy and self._credential_configured
        return HealthCheckResponse(
            status="healthy" if is_healthy else "degraded",
            cache_healthy=cache_healthy,
            credential_configured=self._credential_configured,
        )
