import logging
import threading
from typing import List, Optional

import httpx
from pydantic import ValidationError

from beepboop.core.config import settings
from beepboop.core.errors import CompletionServiceError
from beepboop.models.schemas.chat import ChatMessage
from beepboop.models.schemas.completion import ChatCompletionRequest, ChatCompletionResponse

# Configure logger
logger = logging.getLogger(__name__)

# Singleton instance with thread safety
_CLIENT_INSTANCE: Optional["CompletionClient"] = None
_client_lock = threading.Lock()


class CompletionClient:
    """Client for the external OpenAI-compatible chat completion service"""

    def __init__(
        self,
        api_url: str = settings.COMPLETION_API_URL,
        timeout: float = settings.COMPLETION_TIMEOUT_SECONDS,
        temperature: float = settings.COMPLETION_TEMPERATURE,
        max_tokens: int = settings.COMPLETION_MAX_TOKENS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the completion client

        Args:
            api_url: Full URL of the chat completions endpoint
            timeout: Request timeout in seconds
            temperature: Sampling temperature sent with every request
            max_tokens: Token limit sent with every request (-1 for unbounded)
            transport: Optional httpx transport, used to stub the service in tests

        Raises:
            ValueError: If the URL is empty or the temperature is out of range
        """
        if not api_url:
            raise ValueError("Completion API URL is required")
        if not 0.0 <= temperature <= 2.0:
            raise ValueError("Temperature must be between 0.0 and 2.0")

        self.api_url = api_url
        self.timeout = timeout
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.transport = transport
        logger.info(f"Completion client initialized for endpoint: {api_url}")

    def build_request(self, messages: List[ChatMessage], model: str) -> ChatCompletionRequest:
        return ChatCompletionRequest(
            model=model,
            messages=messages,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            stream=False,
        )

    async def complete(self, messages: List[ChatMessage], model: str) -> ChatMessage:
        """
        Run one completion request/response cycle

        Args:
            messages: Full conversation context, oldest first
            model: Name of the model to invoke

        Returns:
            The assistant message from the first choice

        Raises:
            CompletionServiceError: On transport errors, non-2xx responses or
                a body that does not match the expected shape
        """
        payload = self.build_request(messages, model).model_dump()

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    self.api_url,
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
        except httpx.TimeoutException as e:
            raise CompletionServiceError(f"Completion request timed out: {e!r}") from e
        except httpx.HTTPError as e:
            raise CompletionServiceError(f"Completion request failed: {e!r}") from e

        if not response.is_success:
            logger.error(f"Completion service error: {response.status_code} - {response.text[:500]}")
            raise CompletionServiceError(
                f"Completion service returned status {response.status_code}",
                status_code=response.status_code,
            )

        try:
            parsed = ChatCompletionResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise CompletionServiceError(f"Malformed completion response: {e}") from e

        return parsed.choices[0].message


def get_completion_client(**kwargs) -> CompletionClient:
    """
    Return the process-wide completion client, creating it on first use

    Args:
        **kwargs: Arguments passed to the constructor on first creation

    Returns:
        A singleton CompletionClient
    """
    global _CLIENT_INSTANCE
    with _client_lock:
        if _CLIENT_INSTANCE is None:
            _CLIENT_INSTANCE = CompletionClient(**kwargs)
        return _CLIENT_INSTANCE


def clear_completion_client() -> None:
    """Drop the cached client; used by tests and after settings changes."""
    global _CLIENT_INSTANCE
    with _client_lock:
        _CLIENT_INSTANCE = None
