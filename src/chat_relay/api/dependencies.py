"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services built once in the lifespan and stored in app.state
    - Dependency functions retrieve from request.app.state
    - One response cache per process, no module-level mutable state
"""

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from chat_relay.config import configure_logging, settings
from chat_relay.handlers import ChatHandler
from chat_relay.protocols import CompletionProvider
from chat_relay.repositories import InMemoryResponseCache, OpenAICompletionClient
from chat_relay.services import ChatSession, Dispatcher

logger = logging.getLogger(__name__)


def get_handler(request: Request) -> ChatHandler:
    """Dependency injection for ChatHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "chat_handler", None)
    if handler is None:
        raise RuntimeError("ChatHandler not initialized. Check lifespan setup.")
    return handler


def make_lifespan(
    provider: CompletionProvider | None = None,
) -> Callable[[FastAPI], AbstractAsyncContextManager[None]]:
    """Build the lifespan context manager for the app.

    Args:
        provider: Completion provider to use instead of the OpenAI client
            (tests pass one backed by a mock transport).

    Returns:
        A lifespan function for ``FastAPI(lifespan=...)``
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Initialize all layers and store them in app.state.

        1. Response cache - one per process
        2. Completion provider and dispatcher
        3. Chat session and handler

        Cleanup:
            Cancels abandoned sends, closes the HTTP client and removes
            everything from app.state on shutdown.
        """
        configure_logging()

        if not settings.has_credential:
            logger.warning("OPENAI_API_KEY is not set; completion requests will be rejected")

        cache = InMemoryResponseCache.create(ttl=settings.cache_ttl)
        completion_provider = provider or OpenAICompletionClient.create()
        dispatcher = Dispatcher.create(cache=cache, provider=completion_provider)
        session = ChatSession(dispatcher=dispatcher)
        handler = ChatHandler(
            session=session,
            cache=cache,
            credential_configured=settings.has_credential,
        )

        app.state.response_cache = cache
        app.state.completion_provider = completion_provider
        app.state.dispatcher = dispatcher
        app.state.chat_session = session
        app.state.chat_handler = handler

        logger.info("Chat relay initialized (model=%s)", completion_provider.model_name)
        logger.info("Cache TTL: %ss, client timeout: %ss", cache.ttl, session.client_timeout)

        yield

        await session.aclose()
        await completion_provider.close()
        cache.clear()

        del app.state.chat_handler
        del app.state.chat_session
        del app.state.dispatcher
        del app.state.completion_provider
        del app.state.response_cache
        logger.info("Chat relay shut down")

    return lifespan


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[ChatHandler, Depends(get_handler)]
