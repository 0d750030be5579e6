"""Pytest fixtures and shared test configuration.

Fixtures:
    - fake_service: Scripted stand-in for the OpenAI-backed CompletionService
    - app: FastAPI app with the completion service overridden
    - async_client: HTTPX client bound to the app through ASGITransport
    - client_config: ClientConfig pointing at the in-process app
    - user: NiceGUI simulated browser (from nicegui.testing.user_plugin)
"""

from collections.abc import AsyncGenerator, Sequence

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from chatgame.api.app import create_app
from chatgame.client.config import ClientConfig
from chatgame.llm.service import CompletionServiceError, get_completion_service
from chatgame.models.schemas import Message

pytest_plugins = ["nicegui.testing.user_plugin"]


class FakeCompletionService:
    """Returns queued replies and records every history it receives.

    Queue a CompletionServiceError instance to make the next call fail.
    """

    def __init__(self) -> None:
        self.replies: list[str | CompletionServiceError] = []
        self.calls: list[list[Message]] = []

    async def complete(self, messages: Sequence[Message]) -> str:
        self.calls.append(list(messages))
        reply = self.replies.pop(0) if self.replies else "reply"
        if isinstance(reply, CompletionServiceError):
            raise reply
        return reply


@pytest.fixture
def fake_service() -> FakeCompletionService:
    return FakeCompletionService()


@pytest.fixture
def app(fake_service: FakeCompletionService) -> FastAPI:
    """Create the API with the LLM replaced by the fake service."""
    application = create_app()
    application.dependency_overrides[get_completion_service] = lambda: fake_service
    return application


@pytest.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def client_config() -> ClientConfig:
    return ClientConfig(api_base_url="http://test", timeout=5.0)
