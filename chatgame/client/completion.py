"""HTTP client for the completion endpoint.

Posts the whole conversation as ``{"messages": [...]}`` and reads the
``content`` field of the reply. Any non-success status, timeout or
connection problem is raised as a CompletionFailure.
"""

import logging
from collections.abc import Sequence

import httpx
from pydantic import ValidationError

from chatgame.client.config import ClientConfig, get_client_config
from chatgame.models.schemas import CompletionRequest, CompletionResponse, Message

logger = logging.getLogger(__name__)


class CompletionFailure(Exception):
    """Raised when a completion round does not produce a reply.

    Attributes:
        description: Human-readable reason reported by the endpoint.
        status_code: HTTP status of the reply, None for transport errors.
    """

    def __init__(self, description: str, status_code: int | None = None) -> None:
        super().__init__(f"Chat completion error: {description}")
        self.description = description
        self.status_code = status_code


def _error_description(response: httpx.Response) -> str:
    """Pull the error text out of a failed reply.

    Prefers the JSON ``content`` field and falls back to the raw body,
    then to the status line.
    """
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict) and body.get("content") is not None:
        return str(body["content"])
    if response.text:
        return response.text
    return f"HTTP {response.status_code}"


class CompletionClient:
    """Sends completion rounds to the configured endpoint.

    A transport can be injected to talk to an in-process ASGI app or a
    mock, which is how the tests drive it.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Optional client configuration.
                    Loads from environment if not provided.
            transport: Optional httpx transport override.
        """
        self._config = config or get_client_config()
        self._transport = transport

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def complete(self, messages: Sequence[Message]) -> str:
        """Run one completion round for the given history.

        Args:
            messages: Full conversation history, oldest first.

        Returns:
            The assistant reply text.

        Raises:
            CompletionFailure: If the endpoint does not answer with 2xx.
        """
        payload = CompletionRequest(messages=list(messages)).model_dump(mode="json")
        logger.info(
            f"Requesting completion for {len(messages)} messages "
            f"from {self._config.completion_url}"
        )

        async with httpx.AsyncClient(
            timeout=self._config.timeout,
            transport=self._transport,
        ) as client:
            try:
                response = await client.post(self._config.completion_url, json=payload)
            except httpx.TimeoutException as e:
                raise CompletionFailure(
                    f"no reply within {self._config.timeout:g}s"
                ) from e
            except httpx.RequestError as e:
                raise CompletionFailure(f"Connection failed: {e}") from e

        if not response.is_success:
            description = _error_description(response)
            logger.warning(
                f"Completion endpoint returned {response.status_code}: {description}"
            )
            raise CompletionFailure(description, status_code=response.status_code)

        try:
            content = CompletionResponse.model_validate_json(response.content).content
        except ValidationError as e:
            raise CompletionFailure(
                "reply has no string 'content' field",
                status_code=response.status_code,
            ) from e

        logger.info(f"Received completion ({len(content)} chars)")
        return content
