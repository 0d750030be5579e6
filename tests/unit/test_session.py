"""Unit tests for the GameSession state machine.

The completer is a scripted fake so every round is deterministic.
"""

import asyncio
from collections.abc import Sequence

import pytest

from chatgame.client.completion import CompletionFailure
from chatgame.conversation.session import (
    GameEvent,
    GameSession,
    GameState,
    InvalidTransition,
)
from chatgame.models.schemas import Message, Role


class ScriptedCompleter:
    """Answers with queued replies; queued CompletionFailures are raised."""

    def __init__(self, *replies: str | CompletionFailure) -> None:
        self.replies = list(replies)
        self.calls: list[list[Message]] = []

    async def complete(self, messages: Sequence[Message]) -> str:
        self.calls.append(list(messages))
        reply = self.replies.pop(0)
        if isinstance(reply, CompletionFailure):
            raise reply
        return reply


class BlockingCompleter:
    """Holds every round open until ``release`` is set."""

    def __init__(self) -> None:
        self.release = asyncio.Event()
        self.started = asyncio.Event()
        self.calls = 0

    async def complete(self, messages: Sequence[Message]) -> str:
        self.calls += 1
        self.started.set()
        await self.release.wait()
        return "reply"


def roles(session: GameSession) -> list[Role]:
    return [message.role for message in session.conversation]


class TestStart:
    """Tests for answering the seed prompt."""

    def test_new_session_holds_only_the_seed(self) -> None:
        session = GameSession("prompt text", ScriptedCompleter())

        assert list(session.conversation) == [Message.user("prompt text")]
        assert session.state == GameState.AWAITING_USER

    async def test_start_appends_assistant_reply(self) -> None:
        """Seed prompt gets exactly one reply and no further requests."""
        completer = ScriptedCompleter("reply")
        session = GameSession("prompt text", completer)

        await session.start()

        assert list(session.conversation) == [
            Message.user("prompt text"),
            Message.assistant("reply"),
        ]
        assert len(completer.calls) == 1
        assert session.state == GameState.AWAITING_USER

    async def test_start_twice_only_requests_once(self) -> None:
        """A second start finds an assistant tail and does nothing."""
        completer = ScriptedCompleter("reply")
        session = GameSession("prompt text", completer)

        await session.start()
        await session.start()

        assert len(completer.calls) == 1
        assert len(session.conversation) == 2

    async def test_start_sends_whole_history(self) -> None:
        completer = ScriptedCompleter("reply")
        session = GameSession("prompt text", completer)

        await session.start()

        assert completer.calls[0] == [Message.user("prompt text")]


class TestSubmit:
    """Tests for user submissions and the completion rounds they trigger."""

    async def test_rounds_alternate_user_and_assistant(self) -> None:
        """Each resolved round leaves an assistant tail after the user turn."""
        completer = ScriptedCompleter("r0", "r1", "r2")
        session = GameSession("prompt", completer)
        await session.start()

        for text in ("go north", "open door"):
            assert await session.submit(Message.user(text)) is True

        assert roles(session) == [
            Role.USER,
            Role.ASSISTANT,
            Role.USER,
            Role.ASSISTANT,
            Role.USER,
            Role.ASSISTANT,
        ]
        assert session.conversation.tail == Message.assistant("r2")
        assert completer.calls[-1][-1] == Message.user("open door")

    async def test_submission_refused_while_round_in_flight(self) -> None:
        """Only one round may be in flight per user turn."""
        completer = BlockingCompleter()
        session = GameSession("prompt", completer)

        start = asyncio.create_task(session.start())
        await completer.started.wait()

        assert session.in_flight is True
        assert session.accepting_input is False
        assert await session.submit(Message.user("too early")) is False
        assert len(session.conversation) == 1

        completer.release.set()
        await start

        assert completer.calls == 1
        assert session.state == GameState.AWAITING_USER

    async def test_assistant_message_cannot_be_submitted(self) -> None:
        session = GameSession("prompt", ScriptedCompleter("reply"))
        await session.start()

        with pytest.raises(ValueError):
            await session.submit(Message.assistant("impersonation"))

    async def test_empty_content_is_submitted_as_is(self) -> None:
        completer = ScriptedCompleter("r0", "r1")
        session = GameSession("prompt", completer)
        await session.start()

        await session.submit(Message.user(""))

        assert session.conversation[2] == Message.user("")


class TestFailure:
    """Tests for failed completion rounds."""

    async def test_failure_raises_and_keeps_conversation(self) -> None:
        """A failed round raises, appends nothing and rolls nothing back."""
        completer = ScriptedCompleter(
            "reply", CompletionFailure("rate limited", status_code=500)
        )
        session = GameSession("prompt text", completer)
        await session.start()

        with pytest.raises(CompletionFailure, match="rate limited"):
            await session.submit(Message.user("hello"))

        assert len(session.conversation) == 3
        assert session.conversation.tail == Message.user("hello")
        assert session.state == GameState.ERROR
        assert session.last_error is not None
        assert session.last_error.status_code == 500

    async def test_input_locked_after_failure(self) -> None:
        completer = ScriptedCompleter(CompletionFailure("down"))
        session = GameSession("prompt", completer)

        with pytest.raises(CompletionFailure):
            await session.start()

        assert session.accepting_input is False
        assert await session.submit(Message.user("hello")) is False
        assert len(completer.calls) == 1

    async def test_retry_resends_same_history(self) -> None:
        """Retry re-runs the round for the unanswered user tail."""
        completer = ScriptedCompleter(CompletionFailure("down"), "reply")
        session = GameSession("prompt", completer)
        with pytest.raises(CompletionFailure):
            await session.start()

        await session.retry()

        assert completer.calls[0] == completer.calls[1]
        assert session.conversation.tail == Message.assistant("reply")
        assert session.state == GameState.AWAITING_USER
        assert session.last_error is None

    async def test_retry_outside_error_state_rejected(self) -> None:
        session = GameSession("prompt", ScriptedCompleter())

        with pytest.raises(InvalidTransition) as exc_info:
            await session.retry()

        assert exc_info.value.state == GameState.AWAITING_USER
        assert exc_info.value.event == GameEvent.RETRY_REQUESTED


class TestListeners:
    """Tests for change notifications."""

    async def test_listeners_see_each_state(self) -> None:
        """Listeners run on entering the round and on finishing it."""
        session = GameSession("prompt", ScriptedCompleter("reply"))
        seen: list[tuple[GameState, int]] = []
        session.on_change(lambda s: seen.append((s.state, len(s.conversation))))

        await session.start()

        assert seen == [
            (GameState.REQUESTING_COMPLETION, 1),
            (GameState.AWAITING_USER, 2),
        ]

    async def test_async_listeners_are_awaited(self) -> None:
        session = GameSession("prompt", ScriptedCompleter(CompletionFailure("down")))
        states: list[GameState] = []

        async def record(s: GameSession) -> None:
            states.append(s.state)

        session.on_change(record)
        with pytest.raises(CompletionFailure):
            await session.start()

        assert states == [GameState.REQUESTING_COMPLETION, GameState.ERROR]
