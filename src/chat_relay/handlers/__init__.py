"""HTTP handlers layer.

Handlers convert between DTOs and service calls, and deal with
HTTP-specific concerns like status codes and error responses.
"""

from .chat_handler import ChatHandler

__all__ = [
    "ChatHandler",
]
