"""Service layer for business logic.

Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> ChatSession -> Dispatcher -> Repository
    (HTTP)  -> (Conversation) -> (Cache + request) -> (Data Access)
"""

from .chat_session import FALLBACK_MESSAGE, ChatSession
from .dispatcher import Dispatcher

__all__ = [
    "FALLBACK_MESSAGE",
    "ChatSession",
    "Dispatcher",
]
