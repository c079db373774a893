"""Integration tests for components working together as a system.

Coverage:
    - Full conversations: initialization, text turns, document turns, failures
    - FastAPI host health endpoint
    - Live Gemini round-trip (when configured)

Requires GEMINI_API_KEY for the live test only.
"""
