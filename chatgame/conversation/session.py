"""Game session state machine.

Owns the conversation for one page and decides when a completion round
runs. A round is only started from an explicit event, so a user turn
can never trigger more than one request:

    AWAITING_USER  --USER_SUBMITTED-------->  REQUESTING_COMPLETION
    REQUESTING_COMPLETION --COMPLETION_SUCCEEDED-->  AWAITING_USER
    REQUESTING_COMPLETION --COMPLETION_FAILED----->  ERROR
    ERROR          --RETRY_REQUESTED------->  REQUESTING_COMPLETION

Failures are recorded on the session and then re-raised to the caller.
The conversation is never rolled back.
"""

import logging
from collections.abc import Awaitable, Callable, Sequence
from enum import Enum
from typing import Protocol

from chatgame.client.completion import CompletionFailure
from chatgame.conversation.store import Conversation
from chatgame.models.schemas import Message, Role

logger = logging.getLogger(__name__)


class GameState(str, Enum):
    AWAITING_USER = "awaiting_user"
    REQUESTING_COMPLETION = "requesting_completion"
    ERROR = "error"


class GameEvent(str, Enum):
    USER_SUBMITTED = "user_submitted"
    COMPLETION_SUCCEEDED = "completion_succeeded"
    COMPLETION_FAILED = "completion_failed"
    RETRY_REQUESTED = "retry_requested"


_TRANSITIONS: dict[tuple[GameState, GameEvent], GameState] = {
    (GameState.AWAITING_USER, GameEvent.USER_SUBMITTED): GameState.REQUESTING_COMPLETION,
    (GameState.REQUESTING_COMPLETION, GameEvent.COMPLETION_SUCCEEDED): GameState.AWAITING_USER,
    (GameState.REQUESTING_COMPLETION, GameEvent.COMPLETION_FAILED): GameState.ERROR,
    (GameState.ERROR, GameEvent.RETRY_REQUESTED): GameState.REQUESTING_COMPLETION,
}


class InvalidTransition(Exception):
    """Raised when an event is not allowed in the current state."""

    def __init__(self, state: GameState, event: GameEvent) -> None:
        super().__init__(f"Event {event.value!r} is not allowed in state {state.value!r}")
        self.state = state
        self.event = event


class Completer(Protocol):
    async def complete(self, messages: Sequence[Message]) -> str: ...


Listener = Callable[["GameSession"], Awaitable[None] | None]


class GameSession:
    """Conversation plus the state of its completion round.

    Attributes:
        conversation: Current conversation snapshot. Replaced, never mutated.
        state: Current state machine state.
        last_error: The failure that moved the session into ERROR, if any.
    """

    def __init__(self, prompt: str, completer: Completer) -> None:
        self.conversation = Conversation.seeded(prompt)
        self.state = GameState.AWAITING_USER
        self.last_error: CompletionFailure | None = None
        self._completer = completer
        self._listeners: list[Listener] = []

    @property
    def accepting_input(self) -> bool:
        """Whether a user message may be submitted right now."""
        return self.state == GameState.AWAITING_USER

    @property
    def in_flight(self) -> bool:
        return self.state == GameState.REQUESTING_COMPLETION

    def on_change(self, listener: Listener) -> None:
        """Register a callback run after every conversation or state change."""
        self._listeners.append(listener)

    async def _notify(self) -> None:
        for listener in self._listeners:
            result = listener(self)
            if result is not None:
                await result

    def _dispatch(self, event: GameEvent) -> None:
        next_state = _TRANSITIONS.get((self.state, event))
        if next_state is None:
            raise InvalidTransition(self.state, event)
        logger.debug(f"{self.state.value} --{event.value}--> {next_state.value}")
        self.state = next_state

    def add_message(self, message: Message) -> None:
        self.conversation = self.conversation.add_message(message)

    async def start(self) -> None:
        """Answer the seed prompt.

        Does nothing unless the tail is user-authored and no round has
        run yet, so calling it again after the first reply is harmless.
        """
        if not (self.accepting_input and self.conversation.needs_completion):
            return
        self._dispatch(GameEvent.USER_SUBMITTED)
        await self._notify()
        await self._complete_round()

    async def submit(self, message: Message) -> bool:
        """Append a user message and run the completion round for it.

        Args:
            message: User-authored message, content taken as-is.

        Returns:
            False if the session was not accepting input, True otherwise.

        Raises:
            ValueError: If the message is not user-authored.
            CompletionFailure: If the completion round fails.
        """
        if message.role != Role.USER:
            raise ValueError("Only user messages can be submitted")
        if not self.accepting_input:
            logger.info(f"Ignoring submission while {self.state.value}")
            return False

        self._dispatch(GameEvent.USER_SUBMITTED)
        self.add_message(message)
        await self._notify()
        await self._complete_round()
        return True

    async def retry(self) -> None:
        """Re-run the failed completion round for the current history.

        Raises:
            InvalidTransition: If the session is not in ERROR.
            CompletionFailure: If the round fails again.
        """
        self._dispatch(GameEvent.RETRY_REQUESTED)
        self.last_error = None
        await self._notify()
        await self._complete_round()

    async def _complete_round(self) -> None:
        try:
            content = await self._completer.complete(self.conversation.messages)
        except CompletionFailure as e:
            self.last_error = e
            self._dispatch(GameEvent.COMPLETION_FAILED)
            logger.warning(f"Completion round failed: {e}")
            await self._notify()
            raise

        self.add_message(Message.assistant(content))
        self._dispatch(GameEvent.COMPLETION_SUCCEEDED)
        await self._notify()
