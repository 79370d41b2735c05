"""Shared fixtures and fakes for chat relay tests."""

import asyncio
from collections.abc import Callable

import httpx
import pytest

from chat_relay.exceptions import CompletionError

BASE_URL = "https://api.openai.com/v1"


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeProvider:
    """In-memory CompletionProvider that records every call."""

    model_name = "fake-model"

    def __init__(
        self,
        reply: str | Callable[[str], str] = "Hi there!",
        delay: float = 0.0,
        error: Exception | None = None,
    ) -> None:
        self.reply = reply
        self.delay = delay
        self.error = error
        self.calls: list[tuple[str, str]] = []
        self.closed = False

    async def complete(self, user_message: str, system_prompt: str = "") -> str:
        self.calls.append((system_prompt, user_message))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if callable(self.reply):
            return self.reply(user_message)
        return self.reply

    async def close(self) -> None:
        self.closed = True


def completion_body(text: str) -> dict:
    """Build a minimal successful chat completion payload."""
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": text},
                "finish_reason": "stop",
            }
        ],
    }


def mock_http_client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
    """Create an AsyncClient whose requests are answered by ``handler``."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def clock():
    """Create a manually advanced clock."""
    return FakeClock()


@pytest.fixture
def provider():
    """Create a fake provider that answers "Hi there!"."""
    return FakeProvider()


@pytest.fixture
def failing_provider():
    """Create a fake provider that fails like an HTTP 500."""
    return FakeProvider(error=CompletionError("Completion API error: HTTP 500", status_code=500))
