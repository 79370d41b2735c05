from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chat_relay.api.dependencies import HandlerDep, make_lifespan
from chat_relay.config import settings
from chat_relay.dto import (
    CacheStatsResponse,
    ConversationResponse,
    HealthCheckResponse,
    SendMessageRequest,
    SendMessageResponse,
)
from chat_relay.protocols import CompletionProvider


def create_app(provider: CompletionProvider | None = None) -> FastAPI:
    """Create the chat relay API.

    Args:
        provider: Completion provider override. Defaults to the OpenAI client.

    Returns:
        The configured FastAPI application
    """
    app = FastAPI(
        title="Chat Relay API",
        description="Chat backend relaying messages to a completion API with response caching",
        version="0.1.0",
        lifespan=make_lifespan(provider),
    )

    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    async def root() -> dict[str, Any]:
        """Root endpoint with API information."""
        return {
            "name": "Chat Relay API",
            "version": "0.1.0",
            "endpoints": {
                "messages": "/messages",
                "cache": "/cache/stats",
                "health": "/health",
                "docs": "/docs",
            },
        }

    @app.get("/health", response_model=HealthCheckResponse)
    async def health(handler: HandlerDep) -> HealthCheckResponse:
        """Health check endpoint."""
        return await handler.health_check()

    @app.get("/messages", response_model=ConversationResponse)
    async def get_messages(handler: HandlerDep) -> ConversationResponse:
        """List the conversation in insertion order."""
        return await handler.get_messages()

    @app.post("/messages", response_model=SendMessageResponse)
    async def send_message(
        request: SendMessageRequest,
        handler: HandlerDep,
    ) -> SendMessageResponse:
        """
        Submit a user message and wait for the bot reply.

        Args:
            request: Message request with the user's text.

        Returns:
            The bot reply (the fallback text on failure) and the conversation.
        """
        return await handler.send_message(request)

    @app.get("/cache/stats", response_model=CacheStatsResponse)
    async def get_stats(handler: HandlerDep) -> CacheStatsResponse:
        """Get response cache statistics."""
        return await handler.get_stats()

    @app.delete("/cache", response_model=dict[str, Any])
    async def clear_cache(handler: HandlerDep) -> dict[str, Any]:
        """Clear all entries from the response cache."""
        return await handler.clear_cache()

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "chat_relay.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
