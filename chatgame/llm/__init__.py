"""LLM access for the completion endpoint.

Responsibilities:
    - Configuration of the OpenAI (or OpenAI-compatible) provider
    - Turning a conversation history into the next assistant turn

Maintains clean separation from the HTTP layer.
"""

from chatgame.llm.config import LLMConfig, get_llm_config
from chatgame.llm.service import (
    CompletionService,
    CompletionServiceError,
    get_completion_service,
)

__all__ = [
    "CompletionService",
    "CompletionServiceError",
    "LLMConfig",
    "get_completion_service",
    "get_llm_config",
]
