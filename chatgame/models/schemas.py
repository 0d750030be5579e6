from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """Speaker of a conversation turn."""

    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """A single turn in the conversation.

    Messages are frozen: the conversation only ever grows by appending
    new instances.

    Attributes:
        role: Who produced the message (user or assistant).
        content: The message text. Empty strings are allowed.
    """

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(role=Role.USER, content=content)

    @classmethod
    def assistant(cls, content: str) -> "Message":
        return cls(role=Role.ASSISTANT, content=content)


class CompletionRequest(BaseModel):
    """Request payload for the completion endpoint.

    Attributes:
        messages: The full conversation so far, oldest first.
    """

    messages: list[Message] = Field(..., min_length=1)


class CompletionResponse(BaseModel):
    """Body returned by the completion endpoint.

    The same shape is used for failures, where ``content`` holds a
    human-readable error description.

    Attributes:
        content: Assistant reply text, or the error description.
    """

    content: str
