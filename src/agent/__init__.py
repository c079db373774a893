"""Agno agent logic for the mentor's model backend.

Handles the Gemini conversation behind each chat session.

Responsibilities:
    - Mentor persona (system instruction and fixed messages)
    - Configuration loaded from the environment
    - Session creation and turn submission through Agno

Maintains clean separation from session state and the UI.
"""

from src.agent.config import MentorConfig, get_mentor_config
from src.agent.model_service import (
    AgnoModelService,
    AgnoSession,
    ModelService,
    ModelServiceError,
)

__all__ = [
    "AgnoModelService",
    "AgnoSession",
    "MentorConfig",
    "ModelService",
    "ModelServiceError",
    "get_mentor_config",
]
