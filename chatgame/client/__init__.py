"""Client side of the completion contract.

Posts the conversation history to the completion endpoint with httpx
and turns failed rounds into CompletionFailure.
"""

from chatgame.client.completion import CompletionClient, CompletionFailure
from chatgame.client.config import ClientConfig, get_client_config

__all__ = ["ClientConfig", "CompletionClient", "CompletionFailure", "get_client_config"]
