"""Append-only conversation history."""

from collections.abc import Iterable, Iterator

from chatgame.models.schemas import Message, Role


class Conversation:
    """Ordered, immutable sequence of messages.

    ``add_message`` never touches the receiver; it returns a new
    conversation holding the old messages followed by the new one.
    Owners replace their reference, so anything that rendered the old
    conversation keeps seeing a consistent snapshot.
    """

    __slots__ = ("_messages",)

    def __init__(self, messages: Iterable[Message]) -> None:
        self._messages: tuple[Message, ...] = tuple(messages)
        if not self._messages:
            raise ValueError("A conversation needs at least one message")

    @classmethod
    def seeded(cls, prompt: str) -> "Conversation":
        """Start a conversation from a single user-authored prompt."""
        return cls([Message.user(prompt)])

    def add_message(self, message: Message) -> "Conversation":
        return Conversation((*self._messages, message))

    @property
    def messages(self) -> tuple[Message, ...]:
        return self._messages

    @property
    def tail(self) -> Message:
        return self._messages[-1]

    @property
    def needs_completion(self) -> bool:
        """True when the latest message was written by the user."""
        return self.tail.role == Role.USER

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self._messages)

    def __getitem__(self, index: int) -> Message:
        return self._messages[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Conversation):
            return NotImplemented
        return self._messages == other._messages

    def __hash__(self) -> int:
        return hash(self._messages)

    def __repr__(self) -> str:
        return f"Conversation({len(self._messages)} messages, tail={self.tail.role.value})"
