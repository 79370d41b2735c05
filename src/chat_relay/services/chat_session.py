"""Chat session: the conversation state around the dispatcher.

A session owns the ordered list of messages, guards against empty input
and overlapping sends, races each send against the client timeout, and
turns every dispatch failure into one fixed bot reply.
"""

import asyncio
import logging

from chat_relay.config import settings
from chat_relay.entities import Message
from chat_relay.exceptions import ClientTimeoutError, DispatchError, SessionBusyError
from chat_relay.services.dispatcher import Dispatcher

logger = logging.getLogger(__name__)

FALLBACK_MESSAGE = "Sorry, there was an error processing your request."


class ChatSession:
    """Append-only conversation driven by a Dispatcher.

    At most one send is outstanding per session. A send that outlives the
    client timeout is abandoned, not cancelled: it keeps running in the
    background and may still populate the cache, but its result never
    reaches the conversation.

    Example:
        ```python
        session = ChatSession(dispatcher=dispatcher)
        reply = await session.submit("Hello")
        print(reply.content)
        ```
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        system_prompt: str | None = None,
        client_timeout: float | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            dispatcher: Dispatcher used for every submission (required).
            system_prompt: System prompt sent with each message. Defaults to settings.
            client_timeout: Seconds to wait for a send. Defaults to settings.
        """
        self._dispatcher = dispatcher
        self._system_prompt = settings.system_prompt if system_prompt is None else system_prompt
        self._client_timeout = settings.client_timeout if client_timeout is None else client_timeout
        self._messages: list[Message] = []
        self._loading = False
        self._abandoned: set[asyncio.Task] = set()

    @property
    def messages(self) -> tuple[Message, ...]:
        """Snapshot of the conversation in insertion order."""
        return tuple(self._messages)

    @property
    def is_loading(self) -> bool:
        """Whether a send is outstanding (input should be disabled)."""
        return self._loading

    @property
    def client_timeout(self) -> float:
        return self._client_timeout

    def add_message(self, content: str, is_user: bool = True) -> Message:
        """Append a message to the conversation.

        Args:
            content: The message text
            is_user: True for a user message, False for a bot reply

        Returns:
            The appended Message
        """
        message = Message(content=content, is_user=is_user)
        self._messages.append(message)
        return message

    async def submit(self, text: str) -> Message | None:
        """Send a user message and append the bot's reply.

        Args:
            text: The user's input

        Returns:
            The appended bot message, or None if the input was blank

        Raises:
            SessionBusyError: If a previous submission is still outstanding
        """
        if not text.strip():
            return None

        if self._loading:
            raise SessionBusyError("A message is already being processed")

        self.add_message(text, is_user=True)
        self._loading = True

        try:
            try:
                reply = await self._send_with_timeout(text)
            except DispatchError as e:
                logger.error("Error sending message: %s", e)
                reply = FALLBACK_MESSAGE
            except Exception:
                logger.exception("Unexpected error sending message")
                reply = FALLBACK_MESSAGE
            return self.add_message(reply, is_user=False)
        finally:
            self._loading = False

    async def _send_with_timeout(self, text: str) -> str:
        task = asyncio.create_task(self._dispatcher.send(text, self._system_prompt))

        try:
            return await asyncio.wait_for(asyncio.shield(task), timeout=self._client_timeout)
        except asyncio.TimeoutError:
            self._abandon(task)
            raise ClientTimeoutError(
                f"No response within {self._client_timeout:g}s"
            ) from None
        except asyncio.CancelledError:
            self._abandon(task)
            raise

    def _abandon(self, task: asyncio.Task) -> None:
        # Hold a reference until the task finishes so it is not collected.
        self._abandoned.add(task)
        task.add_done_callback(self._on_abandoned_done)

    def _on_abandoned_done(self, task: asyncio.Task) -> None:
        self._abandoned.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.warning("Abandoned send failed after timeout: %s", exc)
        else:
            logger.debug("Abandoned send completed after timeout")

    async def aclose(self) -> None:
        """Cancel abandoned sends that are still running."""
        pending = list(self._abandoned)
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
