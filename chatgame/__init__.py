"""Chat Game - a browser text adventure narrated by an LLM.

Combines FastAPI for the completion endpoint, NiceGUI for the chat page,
httpx for the client side of the completion contract, and Pydantic for
data validation and configuration.

Components:
    - api: Completion endpoint and health check
    - llm: OpenAI-backed completion service
    - client: HTTP client for the completion endpoint
    - conversation: Conversation store and game session state machine
    - ui: Game page (message list and input box)
    - models: Message and wire schemas
"""

__version__ = "0.1.0"
