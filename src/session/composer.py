"""Attachment encoding and per-turn payload composition."""

import asyncio
import base64
import logging
import mimetypes
from collections.abc import Callable
from pathlib import Path

from src.agent.prompts import DOCUMENT_FALLBACK_PROMPT
from src.models.schemas import (
    InlineData,
    InlineDataPart,
    PendingAttachment,
    SessionState,
    TextPart,
    TurnPayload,
)

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"


def _is_expected_type(mime_type: str) -> bool:
    return mime_type == "application/pdf" or mime_type.startswith("text/")


def encode_attachment(name: str, mime_type: str, content: bytes) -> PendingAttachment:
    """Encode file content the way a browser data URL does, keeping only the base64 body.

    Args:
        name: Original filename, kept verbatim.
        mime_type: Declared content type, kept verbatim.
        content: Full file bytes.

    Returns:
        PendingAttachment ready to be sent.
    """
    mime_type = mime_type or DEFAULT_MIME_TYPE
    data_url = f"data:{mime_type};base64,{base64.b64encode(content).decode('ascii')}"
    payload = data_url.split(",", 1)[1]
    return PendingAttachment(name=name, mime_type=mime_type, payload=payload)


def build_payload(text: str | None, attachment: PendingAttachment | None) -> TurnPayload:
    """Compose the content submitted to the model for one turn.

    With an attachment the payload is exactly two parts, inline data then text.
    The text part falls back to the document analysis prompt when no text was typed.
    Without an attachment it is the trimmed text as a plain message.
    """
    text = (text or "").strip()
    if attachment is None:
        return TurnPayload(message=text)

    return TurnPayload(
        parts=[
            InlineDataPart(
                inline_data=InlineData(
                    mime_type=attachment.mime_type,
                    data=attachment.payload,
                )
            ),
            TextPart(text=text or DOCUMENT_FALLBACK_PROMPT),
        ]
    )


class MessageComposer:
    """Holds the single pending attachment of a session."""

    def __init__(
        self,
        state: SessionState,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self._state = state
        self._on_change = on_change

    @property
    def pending(self) -> PendingAttachment | None:
        return self._state.pending_attachment

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change()

    async def attach(self, name: str, mime_type: str, content: bytes) -> PendingAttachment:
        """Encode a file and make it the pending attachment, replacing any previous one.

        Type and size are not validated. Files outside PDF and plain text
        are forwarded as-is and left to the model service to accept or reject.
        """
        attachment = await asyncio.to_thread(encode_attachment, name, mime_type, content)
        if not _is_expected_type(attachment.mime_type):
            logger.warning(
                f"Attachment {name} has type {attachment.mime_type}, "
                "expected PDF or plain text; forwarding anyway"
            )

        replaced = self._state.pending_attachment
        self._state.pending_attachment = attachment
        if replaced is not None:
            logger.debug(f"Replaced pending attachment {replaced.name}")
        logger.info(f"Attached {name} ({attachment.mime_type}, {len(content)} bytes)")
        self._notify()
        return attachment

    async def attach_path(self, path: str | Path) -> PendingAttachment:
        """Read a local file and attach it, guessing its type from the extension."""
        path = Path(path)
        content = await asyncio.to_thread(path.read_bytes)
        mime_type, _ = mimetypes.guess_type(path.name)
        return await self.attach(path.name, mime_type or DEFAULT_MIME_TYPE, content)

    def clear(self) -> None:
        """Remove the pending attachment without touching the conversation."""
        if self._state.pending_attachment is None:
            return
        self._state.pending_attachment = None
        self._notify()

    def take(self) -> PendingAttachment | None:
        """Consume the pending attachment."""
        attachment = self._state.pending_attachment
        self._state.pending_attachment = None
        return attachment
