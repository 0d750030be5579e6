"""OpenAI-backed completion service.

Turns a conversation history into a single assistant reply using the
chat completions API. The whole history is sent every time; the service
itself keeps no state between calls.
"""

import logging
from collections.abc import Sequence
from typing import Any

from openai import AsyncOpenAI, OpenAIError

from chatgame.llm.config import LLMConfig, get_llm_config
from chatgame.models.schemas import Message

logger = logging.getLogger(__name__)


class CompletionServiceError(Exception):
    """Raised when the LLM provider fails to produce a reply."""


class CompletionService:
    """Wraps an AsyncOpenAI client for one-shot chat completions."""

    def __init__(self, config: LLMConfig | None = None) -> None:
        """Initialize the completion service.

        Args:
            config: Optional LLM configuration.
                    Loads from environment if not provided.
        """
        self._config = config or get_llm_config()
        self._client = AsyncOpenAI(
            api_key=self._config.api_key,
            base_url=self._config.base_url,
            timeout=self._config.request_timeout,
        )

    async def complete(self, messages: Sequence[Message]) -> str:
        """Generate the next assistant turn.

        Args:
            messages: Conversation history, oldest first.

        Returns:
            The reply text (empty string if the model returned none).

        Raises:
            CompletionServiceError: If the provider call fails.
        """
        request_params: dict[str, Any] = {
            "model": self._config.model,
            "messages": [
                {"role": message.role.value, "content": message.content}
                for message in messages
            ],
            "temperature": self._config.temperature,
            "max_tokens": self._config.max_tokens,
        }

        try:
            completion = await self._client.chat.completions.create(**request_params)
        except OpenAIError as e:
            logger.error(f"LLM request failed: {e}")
            raise CompletionServiceError(str(e)) from e

        if not completion.choices:
            raise CompletionServiceError("Model returned no choices")

        content = completion.choices[0].message.content or ""
        if completion.usage:
            logger.info(
                f"Completion used {completion.usage.prompt_tokens} prompt / "
                f"{completion.usage.completion_tokens} completion tokens"
            )
        return content


# Module-level singleton instance
_completion_service: CompletionService | None = None


def get_completion_service() -> CompletionService:
    """Get or create the global completion service.

    Returns:
        The CompletionService instance.
    """
    global _completion_service
    if _completion_service is None:
        _completion_service = CompletionService()
    return _completion_service
