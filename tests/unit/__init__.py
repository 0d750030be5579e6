"""Unit tests for individual components in isolation.

Coverage:
    - models/ and conversation/: Message, Conversation and GameSession
    - client/: Completion client against mock transports
    - llm/: Configuration and the OpenAI-backed service (patched)
    - ui/: GameInput submit logic
"""
