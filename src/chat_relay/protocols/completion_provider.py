"""Completion provider protocol.

Defines the interface for any service that turns a system prompt and a
user message into a single completion text.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class CompletionProvider(Protocol):
    """Protocol for chat completion services.

    Example:
        ```python
        from chat_relay.protocols import CompletionProvider

        provider: CompletionProvider = OpenAICompletionClient.create()
        ```
    """

    @property
    def model_name(self) -> str:
        """Return the model identifier requests are sent to."""
        ...

    async def complete(self, user_message: str, system_prompt: str = "") -> str:
        """Request a completion.

        Args:
            user_message: The user's message
            system_prompt: The system prompt (sent even when empty)

        Returns:
            The completion text

        Raises:
            CompletionError: If the request fails or the payload is malformed
        """
        ...

    async def close(self) -> None:
        """Release network resources."""
        ...
