"""Session manager: lifecycle of one mentor conversation.

Owns the remote session handle, appends turns in order and admits at most one
outstanding model request at a time.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from src.agent.model_service import ModelService, ModelServiceError
from src.agent.prompts import (
    CONNECTION_ERROR_MESSAGE,
    OPENING_PROMPT,
    PROCESSING_ERROR_MESSAGE,
    SYSTEM_INSTRUCTION,
    TEMPERATURE,
    uploaded_file_placeholder,
)
from src.models.schemas import (
    ConversationTurn,
    PendingAttachment,
    Role,
    SessionState,
    TurnPayload,
)
from src.session.composer import MessageComposer, build_payload

logger = logging.getLogger(__name__)


class SessionError(Exception):
    """Base class for misuse of a chat session."""

    pass


class SessionBusyError(SessionError):
    """Raised when a request is made while another one is in flight."""

    pass


class SessionNotReadyError(SessionError):
    """Raised when sending before a model session has been established."""

    pass


class SessionManager:
    """Manages one conversation with the remote model.

    Every instance owns its own state and handle, so independent sessions
    (one per browser page, or per test) never interfere.
    """

    def __init__(
        self,
        service: ModelService,
        *,
        system_instruction: str = SYSTEM_INSTRUCTION,
        temperature: float = TEMPERATURE,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        """Initialize the session manager.

        Args:
            service: Model backend used to create the session and send turns.
            system_instruction: Persona prompt bound to the session.
            temperature: Sampling temperature bound to the session.
            on_change: Called after every state change, e.g. to re-render a UI.
        """
        self._service = service
        self._system_instruction = system_instruction
        self._temperature = temperature
        self._on_change = on_change
        self._handle: Any = None
        self._lock = asyncio.Lock()
        self.state = SessionState()
        self.composer = MessageComposer(self.state, on_change=on_change)

    @property
    def conversation(self) -> tuple[ConversationTurn, ...]:
        return tuple(self.state.conversation)

    @property
    def pending_attachment(self) -> PendingAttachment | None:
        return self.state.pending_attachment

    @property
    def is_awaiting_response(self) -> bool:
        return self.state.is_awaiting_response

    @property
    def is_ready(self) -> bool:
        """True when a session exists and no request is outstanding."""
        return self._handle is not None and not self._lock.locked()

    def can_submit(self, text: str | None) -> bool:
        has_content = bool((text or "").strip()) or self.state.pending_attachment is not None
        return self.is_ready and has_content

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change()

    def _append(self, role: Role, text: str, attachment_name: str | None = None) -> None:
        self.state.conversation.append(
            ConversationTurn(role=role, text=text, attachment_name=attachment_name)
        )
        self._notify()

    def _set_awaiting(self, value: bool) -> None:
        self.state.is_awaiting_response = value
        self._notify()

    def _check_can_send(self) -> None:
        if self._lock.locked():
            raise SessionBusyError("A request is already in flight for this session")
        if self._handle is None:
            raise SessionNotReadyError("Session is not initialized")

    async def initialize(self) -> None:
        """Start a fresh conversation and seed it with the mentor's introduction.

        Failure leaves a single connection error turn and no usable session;
        calling ``initialize`` again is the only way to recover.
        """
        if self._lock.locked():
            raise SessionBusyError("A request is already in flight for this session")

        async with self._lock:
            self._handle = None
            self.state.conversation = []
            self.state.pending_attachment = None
            self._set_awaiting(True)
            try:
                handle = await self._service.create_session(
                    self._system_instruction, self._temperature
                )
                reply = await self._service.send(handle, TurnPayload(message=OPENING_PROMPT))
            except ModelServiceError:
                logger.exception("Failed to initialize mentor session")
                self.state.is_awaiting_response = False
                self._append(Role.MODEL, CONNECTION_ERROR_MESSAGE)
                return

            self._handle = handle
            self.state.is_awaiting_response = False
            self._append(Role.MODEL, reply)
            logger.info("Mentor session initialized")

    async def send_turn(
        self,
        text: str | None = None,
        attachment: PendingAttachment | None = None,
    ) -> str | None:
        """Send one user turn and record the model's reply.

        Args:
            text: User text; surrounding whitespace is dropped.
            attachment: Optional file to send alongside the text.

        Returns:
            Text of the appended model turn, or None when there was nothing to send.

        Raises:
            SessionBusyError: If another request is in flight.
            SessionNotReadyError: If the session was never initialized or failed to.
        """
        text = (text or "").strip()
        if not text and attachment is None:
            return None

        self._check_can_send()

        async with self._lock:
            if attachment is not None:
                self._append(
                    Role.USER,
                    text or uploaded_file_placeholder(attachment.name),
                    attachment_name=attachment.name,
                )
            else:
                self._append(Role.USER, text)

            payload = build_payload(text, attachment)
            logger.info(
                f"Sending turn ({len(text)} chars, "
                f"attachment={attachment.name if attachment else None})"
            )

            self._set_awaiting(True)
            try:
                reply = await self._service.send(self._handle, payload)
            except ModelServiceError:
                logger.exception("Turn failed")
                reply = PROCESSING_ERROR_MESSAGE
            finally:
                self.state.is_awaiting_response = False

            self._append(Role.MODEL, reply)
            return reply

    async def submit(self, text: str | None = None) -> str | None:
        """Send the given text together with the pending attachment, consuming it."""
        if not (text or "").strip() and self.state.pending_attachment is None:
            return None

        self._check_can_send()
        return await self.send_turn(text, self.composer.take())
