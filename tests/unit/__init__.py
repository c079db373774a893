"""Unit tests for individual components in isolation.

Coverage:
    - agent/: Configuration and the Agno model service adapter
    - session/: Attachment encoding, payload composition, session state machine
    - ui/: Markdown rendering for mentor replies

Agno classes are patched in adapter tests. Leverages pytest-check for
multiple assertions per test.
"""
