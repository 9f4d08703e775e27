"""HTTP client for the chat-completion proxy.

Hidden design decisions:
- HTTP library and connection handling
- Request body format
- Mapping of status codes onto the dispatch error taxonomy
- Extraction of the reply from the response body
"""

import logging
from collections.abc import Sequence
from typing import Any

import httpx
from pydantic import ValidationError

from ..conversation import Message
from .errors import MalformedResponseError, RateLimitedError, ServerError, TransportFailure
from .models import ProxyResponse

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:3000"
DEFAULT_ENDPOINT = "/api/openAIChat"


def build_payload(messages: Sequence[Message]) -> dict[str, Any]:
    """Build the request body for a history."""
    return {"messages": [msg.to_payload() for msg in messages]}


def extract_reply(data: Any) -> str:
    """Pull the assistant reply out of a decoded proxy response.

    Raises:
        MalformedResponseError: If ``result.choices[0].message.content`` is missing
    """
    try:
        return ProxyResponse.model_validate(data).reply
    except ValidationError as e:
        raise MalformedResponseError(f"{e.error_count()} validation error(s)") from e


class ChatProxyClient:
    """Sends conversation histories to the proxy endpoint.

    Supports async context manager protocol:
        async with ChatProxyClient("http://localhost:3000") as client:
            reply = await client.complete([Message.user("Hello")])
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        endpoint: str = DEFAULT_ENDPOINT,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        **client_kwargs: Any
    ):
        """Initialize the proxy client.

        Args:
            base_url: Scheme and host of the proxy
            endpoint: Path of the chat endpoint
            timeout: Request timeout in seconds, None waits forever
            transport: Optional httpx transport (used by tests)
            **client_kwargs: Additional kwargs for httpx.AsyncClient
        """
        self._endpoint = endpoint
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout),
            transport=transport,
            **client_kwargs
        )

    @property
    def url(self) -> str:
        """Full URL requests are posted to."""
        # Same merge rule httpx applies: endpoint is appended to any base path
        return f"{str(self._client.base_url).rstrip('/')}/{self._endpoint.lstrip('/')}"

    async def complete(self, messages: Sequence[Message]) -> str:
        """Post one history and return the assistant reply.

        Args:
            messages: Full history including the newest user turn

        Returns:
            Assistant reply text

        Raises:
            RateLimitedError: On HTTP 429
            ServerError: On any other non-2xx status
            TransportFailure: If no usable response was obtained
            MalformedResponseError: If a body cannot be decoded or a 2xx body has the wrong shape
        """
        logger.debug(f"POST {self.url} with {len(messages)} message(s)")
        try:
            response = await self._client.post(
                self._endpoint,
                json=build_payload(messages),
                headers={"Content-Type": "application/json"},
            )
        except httpx.DecodingError as e:
            raise MalformedResponseError(f"body could not be decoded: {e}") from e
        except httpx.RequestError as e:
            raise TransportFailure(str(e) or type(e).__name__) from e

        logger.debug(f"Proxy responded with status {response.status_code}")

        if response.is_success:
            try:
                data = response.json()
            except ValueError as e:
                raise MalformedResponseError("body is not JSON") from e
            return extract_reply(data)

        if response.status_code == 429:
            raise RateLimitedError()

        raise ServerError(response.status_code, response.text)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "ChatProxyClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Close on exit.

        Note: Suppresses "Event loop is closed" errors during cleanup,
        a known harmless race in httpx/anyio teardown.
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
