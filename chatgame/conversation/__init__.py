"""Conversation state for one game.

Components:
    - store: Append-only Conversation snapshots
    - session: GameSession state machine driving completion rounds
    - prompt: Seed prompt that opens the game
"""

from chatgame.conversation.prompt import DEFAULT_PROMPT, get_prompt
from chatgame.conversation.session import (
    GameEvent,
    GameSession,
    GameState,
    InvalidTransition,
)
from chatgame.conversation.store import Conversation

__all__ = [
    "DEFAULT_PROMPT",
    "Conversation",
    "GameEvent",
    "GameSession",
    "GameState",
    "InvalidTransition",
    "get_prompt",
]
