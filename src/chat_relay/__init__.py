"""Chat Relay - chat backend with a cached completion dispatcher.

This package provides a layered architecture:

Layers:
    - protocols: Interface contracts (CacheStore, CompletionProvider)
    - repositories: Response cache and completion API client
    - services: Dispatcher and chat session
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from chat_relay import ChatSession, Dispatcher, InMemoryResponseCache, OpenAICompletionClient

    dispatcher = Dispatcher.create(
        cache=InMemoryResponseCache.create(),
        provider=OpenAICompletionClient.create(),
    )
    session = ChatSession(dispatcher=dispatcher)
    reply = await session.submit("Hello")
    ```

For HTTP API:
    ```python
    from chat_relay.api.app import app
    ```
"""

from chat_relay.config import settings
from chat_relay.entities import CacheEntry, CacheKey, Message
from chat_relay.exceptions import (
    ClientTimeoutError,
    CompletionError,
    DispatchError,
    SessionBusyError,
)
from chat_relay.handlers import ChatHandler
from chat_relay.protocols import CacheStore, CompletionProvider
from chat_relay.repositories import InMemoryResponseCache, OpenAICompletionClient
from chat_relay.services import FALLBACK_MESSAGE, ChatSession, Dispatcher

__all__ = [
    # Configuration
    "settings",
    # Protocols (interfaces)
    "CacheStore",
    "CompletionProvider",
    # Services (business logic)
    "Dispatcher",
    "ChatSession",
    "FALLBACK_MESSAGE",
    # Handlers (HTTP)
    "ChatHandler",
    # Repositories (data access)
    "InMemoryResponseCache",
    "OpenAICompletionClient",
    # Entities (domain models)
    "CacheEntry",
    "CacheKey",
    "Message",
    # Errors
    "DispatchError",
    "CompletionError",
    "ClientTimeoutError",
    "SessionBusyError",
]
