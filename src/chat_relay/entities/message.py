"""Conversation message domain entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Message:
    """A single entry in a conversation.

    Attributes:
        content: The message text
        is_user: True for user messages, False for bot replies
        timestamp: When the message was appended (UTC)
    """

    content: str
    is_user: bool
    timestamp: datetime = field(default_factory=_utcnow)
