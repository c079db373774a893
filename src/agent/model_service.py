"""Model service: the contract the session manager talks to, and its Agno adapter.

The session manager never touches Agno directly. It depends on the
``ModelService`` protocol, so tests can drive it with a fake and the
production adapter can change without touching session logic.

Architecture Decisions:

1. **One Agent per session** - Each ``create_session`` call builds its own
   Agno ``Agent`` bound to the mentor's system instruction and temperature.
   Sessions never share a handle.

2. **In-memory history** - Agno only replays history when the agent has a
   db. ``InMemoryDb`` keeps multi-turn context for the life of the process
   without writing anything to disk.

3. **Inline files** - Attachments arrive as base64 parts. They are decoded
   back to bytes and handed to Agno as ``File`` media, which the Gemini model
   class sends as inline data.

4. **One error type** - Every failure (missing key, transport, provider,
   empty reply) surfaces as ``ModelServiceError``. Agno swallows provider
   errors inside ``arun`` and returns a run with ``RunStatus.error``, so the
   run status is checked as well as raised exceptions.
"""

import base64
import logging
import uuid
from dataclasses import dataclass
from typing import Any, Protocol

from agno.agent import Agent
from agno.db.in_memory import InMemoryDb
from agno.media import File
from agno.models.google import Gemini
from agno.run.base import RunStatus
from pydantic import ValidationError

from src.agent.config import MentorConfig, get_mentor_config
from src.models.schemas import TurnPayload

logger = logging.getLogger(__name__)


class ModelServiceError(Exception):
    """Raised when the remote model cannot produce a reply."""

    pass


class ModelService(Protocol):
    """Capability exposed by a chat-completion backend."""

    async def create_session(self, system_instruction: str, temperature: float) -> Any:
        """Open a conversation bound to a system instruction and temperature."""
        ...

    async def send(self, handle: Any, payload: TurnPayload) -> str:
        """Submit one turn on an open conversation and return the reply text."""
        ...


@dataclass(frozen=True)
class AgnoSession:
    """Handle to one Agno-backed conversation."""

    agent: Agent
    session_id: str


class AgnoModelService:
    """Gemini chat sessions through Agno."""

    def __init__(self, config: MentorConfig | None = None) -> None:
        """Initialize the service.

        Args:
            config: Optional mentor configuration.
                    Loaded from environment on first session if not provided.
        """
        self._config = config

    def _get_config(self) -> MentorConfig:
        if self._config is None:
            try:
                self._config = get_mentor_config()
            except ValidationError as e:
                raise ModelServiceError(f"Invalid mentor configuration: {e}") from e
        return self._config

    async def create_session(self, system_instruction: str, temperature: float) -> AgnoSession:
        """Create an Agno agent for a new conversation.

        Args:
            system_instruction: Persona prompt sent as the system message.
            temperature: Sampling temperature for every turn.

        Returns:
            Handle to pass to ``send``.

        Raises:
            ModelServiceError: If configuration is missing or the agent cannot be built.
        """
        config = self._get_config()

        try:
            model = Gemini(
                id=config.model_name,
                api_key=config.api_key,
                temperature=temperature,
            )
            agent = Agent(
                model=model,
                db=InMemoryDb(),
                system_message=system_instruction,
                add_history_to_context=True,
                num_history_runs=config.num_history_runs,
                markdown=True,
            )
        except Exception as e:
            raise ModelServiceError(f"Failed to create model session: {e}") from e

        session = AgnoSession(agent=agent, session_id=str(uuid.uuid4()))
        logger.info(f"Created model session {session.session_id} ({config.model_name})")
        return session

    async def send(self, handle: AgnoSession, payload: TurnPayload) -> str:
        """Send one turn and return the complete reply.

        Args:
            handle: Session returned by ``create_session``.
            payload: Plain message or multimodal parts.

        Returns:
            Reply text.

        Raises:
            ModelServiceError: On any transport or provider failure, or an empty reply.
        """
        try:
            if payload.parts is None:
                response = await handle.agent.arun(
                    payload.message,
                    session_id=handle.session_id,
                )
            else:
                # TurnPayload guarantees exactly [inline data, text]
                inline, text = payload.parts
                file = File(
                    content=base64.b64decode(inline.inline_data.data),
                    mime_type=inline.inline_data.mime_type,
                )
                response = await handle.agent.arun(
                    text.text,
                    session_id=handle.session_id,
                    files=[file],
                )
        except Exception as e:
            raise ModelServiceError(f"Model request failed: {e}") from e

        # Agno reports provider and transport failures as an errored run, not an exception
        if getattr(response, "status", None) == RunStatus.error:
            raise ModelServiceError(f"Model request failed: {response.content}")

        content = getattr(response, "content", None)
        if not content:
            raise ModelServiceError("Model returned an empty response")
        return str(content)
