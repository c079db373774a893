"""Test package for the RITE Digital Mentor.

Unit tests cover isolated logic and integration tests cover whole
conversations.

Structure:
    - unit/: Individual function and class tests
    - integration/: End-to-end session and host app tests

The model service is replaced by an in-process fake everywhere except the
live Gemini test. Leverages pytest with pytest-check for soft assertions.
"""
