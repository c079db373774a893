"""Pydantic models for the chat session.

Provides type safety and validation for everything that flows between the UI,
the session manager and the model service.

Models:
    - ConversationTurn: A rendered message authored by the user or the model
    - PendingAttachment: An encoded file waiting for the next send
    - TurnPayload: Text or multimodal parts submitted for one turn
    - SessionState: Conversation, pending attachment and in-flight flag
"""

from src.models.schemas import (
    ConversationTurn,
    InlineData,
    InlineDataPart,
    PendingAttachment,
    Role,
    SessionState,
    TextPart,
    TurnPayload,
)

__all__ = [
    "ConversationTurn",
    "InlineData",
    "InlineDataPart",
    "PendingAttachment",
    "Role",
    "SessionState",
    "TextPart",
    "TurnPayload",
]
