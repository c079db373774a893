"""Chat session state machine.

Responsibilities:
    - Session lifecycle: initialization with the mentor persona, one turn at a time
    - Attachment encoding and the single pending attachment
    - Payload composition for text-only and file turns
    - Substituting fixed messages for model failures
"""

from src.session.composer import MessageComposer, build_payload, encode_attachment
from src.session.manager import (
    SessionBusyError,
    SessionError,
    SessionManager,
    SessionNotReadyError,
)

__all__ = [
    "MessageComposer",
    "SessionBusyError",
    "SessionError",
    "SessionManager",
    "SessionNotReadyError",
    "build_payload",
    "encode_attachment",
]
