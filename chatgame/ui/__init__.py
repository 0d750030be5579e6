"""NiceGUI interface - thin visualization layer for the game.

Responsibilities:
    - Message list display (one bubble per message, tagged by role)
    - Text input with send button and Enter key
    - Locking the input while a completion round is in flight
    - Error toasts and retry after a failed round

Contains no completion logic. Delegates to GameSession.
"""
