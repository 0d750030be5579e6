"""Completion client configuration with environment variable loading."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

load_dotenv()


class ClientConfig(BaseModel):
    """Where and how the UI reaches the completion endpoint.

    Attributes:
        api_base_url: Base URL of the server exposing the endpoint.
        completion_path: Path of the completion endpoint.
        timeout: Seconds to wait for a reply before giving up.
    """

    api_base_url: str = Field(
        default_factory=lambda: os.getenv("API_BASE_URL", "http://localhost:8000"),
        description="Base URL of the completion server",
    )
    completion_path: str = Field(
        default_factory=lambda: os.getenv("COMPLETION_PATH", "/api/chat-complete"),
        description="Path of the completion endpoint",
    )
    timeout: float = Field(
        default_factory=lambda: float(os.getenv("COMPLETION_TIMEOUT", "120")),
        gt=0.0,
        description="Request timeout in seconds",
    )

    @field_validator("api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("completion_path")
    @classmethod
    def ensure_leading_slash(cls, v: str) -> str:
        return v if v.startswith("/") else f"/{v}"

    @property
    def completion_url(self) -> str:
        return f"{self.api_base_url}{self.completion_path}"


def get_client_config() -> ClientConfig:
    """Create client configuration from environment.

    Returns:
        Configured ClientConfig instance.
    """
    return ClientConfig()
