"""OpenAI-compatible chat completion client.

Sends a single non-streaming request to ``{base_url}/chat/completions``
with a system message and a user message, and extracts the first
choice's message content.

Request body:
    {
        "model": "gpt-3.5-turbo",
        "messages": [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_message}
        ],
        "temperature": 0.7,
        "max_tokens": 500
    }
"""

import logging

import httpx

from chat_relay.config import settings
from chat_relay.exceptions import CompletionError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-3.5-turbo"
TEMPERATURE = 0.7
MAX_TOKENS = 500


class OpenAICompletionClient:
    """OpenAI-based implementation of CompletionProvider protocol.

    This class satisfies the CompletionProvider protocol through structural
    typing - no explicit inheritance needed.

    The transport timeout applies to connect and response alike. Callers
    that need a shorter overall deadline race ``complete`` themselves.

    Example:
        ```python
        client = OpenAICompletionClient.create()
        text = await client.complete("Hello")
        await client.close()
        ```
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        model_name: str = DEFAULT_MODEL,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the completion client.

        Args:
            api_key: Bearer credential. Defaults to settings.openai_api_key.
            base_url: API base URL. Defaults to settings.openai_base_url.
            model_name: Model identifier sent with every request.
            timeout: Transport timeout in seconds. Defaults to settings.
            client: Preconfigured async HTTP client (e.g. with a mock transport).
        """
        self._api_key = api_key if api_key is not None else settings.openai_api_key
        self._base_url = (base_url or settings.openai_base_url).rstrip("/")
        self._model_name = model_name
        self._timeout = settings.request_timeout if timeout is None else timeout
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client.

        Returns:
            The httpx.AsyncClient instance
        """
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    @classmethod
    def create(
        cls,
        api_key: str | None = None,
        base_url: str | None = None,
    ) -> "OpenAICompletionClient":
        """Factory method to create OpenAICompletionClient with defaults.

        Args:
            api_key: Bearer credential. If None, uses settings.
            base_url: API base URL. If None, uses settings.

        Returns:
            Configured OpenAICompletionClient
        """
        return cls(api_key=api_key, base_url=base_url)

    @property
    def timeout(self) -> float:
        """Get the transport timeout in seconds."""
        return self._timeout

    @property
    def model_name(self) -> str:
        """Get the model identifier.

        Returns:
            Model name (e.g., "gpt-3.5-turbo")
        """
        return self._model_name

    def build_payload(self, user_message: str, system_prompt: str = "") -> dict:
        """Build the JSON body for a completion request."""
        return {
            "model": self._model_name,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_message},
            ],
            "temperature": TEMPERATURE,
            "max_tokens": MAX_TOKENS,
        }

    async def complete(self, user_message: str, system_prompt: str = "") -> str:
        """Request a completion for a single user message.

        Args:
            user_message: The user's message
            system_prompt: The system prompt (sent as-is, even when empty)

        Returns:
            The completion text of the first choice

        Raises:
            CompletionError: On transport errors, non-2xx responses, or a
                payload without ``choices[0].message.content``
        """
        url = f"{self._base_url}/chat/completions"
        headers = {
            "Authorization": f"Bearer {self._api_key or ''}",
            "Content-Type": "application/json",
        }

        try:
            response = await self.client.post(
                url,
                json=self.build_payload(user_message, system_prompt),
                headers=headers,
                timeout=self._timeout,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.error("Completion API returned HTTP %s", status_code)
            raise CompletionError(
                f"Completion API error: HTTP {status_code}",
                status_code=status_code,
            ) from e
        except httpx.HTTPError as e:
            logger.error("Completion API request failed: %s", e)
            raise CompletionError(f"Completion API request failed: {e}") from e
        except ValueError as e:
            # Header or body encoding failed before anything was sent.
            logger.error("Could not build completion request: %s", e)
            raise CompletionError(f"Invalid completion request: {e}") from e

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.error("Malformed completion payload: %s", e)
            raise CompletionError(
                f"Unexpected response format: {e}",
                status_code=response.status_code,
            ) from e

        if not isinstance(content, str):
            raise CompletionError(
                "Unexpected response format: completion content is not text",
                status_code=response.status_code,
            )

        return content

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None
