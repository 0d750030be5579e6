"""FastAPI endpoints for the chat game.

Endpoints:
    - GET /health: Service health status
    - POST /api/chat-complete: Next assistant turn for a conversation
"""

from chatgame.api.app import app, create_app

__all__ = ["app", "create_app"]
