"""Test package for Chat Game.

Structure:
    - unit/: Individual function and class tests
    - integration/: API and full game-round workflows

The LLM is always replaced by a scripted fake, so no API key is needed.
"""
