"""Pydantic models shared by the UI, the client and the API.

Models:
    - Role: Speaker of a turn (user or assistant)
    - Message: One immutable conversation turn
    - CompletionRequest: Payload posted to the completion endpoint
    - CompletionResponse: Reply (or error description) from the endpoint
"""

from chatgame.models.schemas import CompletionRequest, CompletionResponse, Message, Role

__all__ = ["CompletionRequest", "CompletionResponse", "Message", "Role"]
