"""Settings for the model behind the completion endpoint.

Values come from the environment (a local ``.env`` is loaded first), so
the same server can point at OpenAI or any OpenAI-compatible gateway.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

load_dotenv()


class LLMConfig(BaseModel):
    """Provider and sampling settings for the game narrator.

    Attributes:
        api_key: Provider API key. Required.
        base_url: Alternative API root, None for api.openai.com.
        model: Chat model identifier.
        temperature: Sampling temperature, 0.0 to 2.0.
        max_tokens: Upper bound on the length of one narrator turn.
        request_timeout: Seconds the provider call may take.
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv("LLM_API_KEY") or os.getenv("OPENAI_API_KEY", ""),
        validate_default=True,
    )
    base_url: str | None = Field(default_factory=lambda: os.getenv("LLM_BASE_URL") or None)
    model: str = Field(default_factory=lambda: os.getenv("LLM_MODEL", "gpt-4o-mini"))
    temperature: float = Field(
        default_factory=lambda: float(os.getenv("LLM_TEMPERATURE", "0.7")),
        ge=0.0,
        le=2.0,
    )
    max_tokens: int = Field(
        default_factory=lambda: int(os.getenv("LLM_MAX_TOKENS", "1024")),
        ge=1,
        le=128000,
    )
    request_timeout: float = Field(default=60.0, gt=0.0)

    @field_validator("api_key")
    @classmethod
    def require_api_key(cls, v: str) -> str:
        key = v.strip()
        if not key:
            raise ValueError("Set LLM_API_KEY or OPENAI_API_KEY to reach the model")
        return key


def get_llm_config() -> LLMConfig:
    """Build the LLM settings from the current environment.

    Raises:
        pydantic.ValidationError: If no API key is configured.
    """
    return LLMConfig()
