"""Integration tests for components working together.

Coverage:
    - API endpoints through ASGITransport
    - Full game rounds from GameInput through the client to the API

The LLM is replaced by a scripted fake; no API key is required.
"""
