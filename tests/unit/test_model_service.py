"""Unit tests for the Agno-backed model service.

Agno classes are patched, so no request leaves the process.
"""

import base64
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from agno.run.base import RunStatus

from src.agent.config import MentorConfig
from src.agent.model_service import AgnoModelService, AgnoSession, ModelServiceError
from src.agent.prompts import CONNECTION_ERROR_MESSAGE, PROCESSING_ERROR_MESSAGE
from src.models.schemas import InlineData, InlineDataPart, Role, TextPart, TurnPayload
from src.session.manager import SessionManager


@pytest.fixture
def config() -> MentorConfig:
    return MentorConfig(api_key="gm-test-key", model_name="gemini-2.5-flash", num_history_runs=30)


def make_session(reply: object = "Hello from the mentor") -> AgnoSession:
    agent = MagicMock()
    agent.arun = AsyncMock(return_value=MagicMock(status=RunStatus.completed, content=reply))
    return AgnoSession(agent=agent, session_id="session-1")


class TestCreateSession:
    """Tests for AgnoModelService.create_session."""

    @patch("src.agent.model_service.InMemoryDb")
    @patch("src.agent.model_service.Gemini")
    @patch("src.agent.model_service.Agent")
    async def test_builds_gemini_model_with_temperature(
        self,
        mock_agent_class: MagicMock,
        mock_gemini: MagicMock,
        mock_db: MagicMock,
        config: MentorConfig,
    ) -> None:
        """Gemini is created with configured model, key and requested temperature."""
        service = AgnoModelService(config=config)

        await service.create_session("You are a mentor.", 0.7)

        mock_gemini.assert_called_once_with(
            id="gemini-2.5-flash",
            api_key="gm-test-key",
            temperature=0.7,
        )

    @patch("src.agent.model_service.InMemoryDb")
    @patch("src.agent.model_service.Gemini")
    @patch("src.agent.model_service.Agent")
    async def test_agent_bound_to_system_instruction_with_history(
        self,
        mock_agent_class: MagicMock,
        mock_gemini: MagicMock,
        mock_db: MagicMock,
        config: MentorConfig,
    ) -> None:
        """Agent gets the system instruction, in-memory db and history settings."""
        service = AgnoModelService(config=config)

        session = await service.create_session("You are a mentor.", 0.7)

        call_kwargs = mock_agent_class.call_args.kwargs
        assert call_kwargs["model"] is mock_gemini.return_value
        assert call_kwargs["db"] is mock_db.return_value
        assert call_kwargs["system_message"] == "You are a mentor."
        assert call_kwargs["add_history_to_context"] is True
        assert call_kwargs["num_history_runs"] == 30
        assert session.agent is mock_agent_class.return_value

    @patch("src.agent.model_service.InMemoryDb")
    @patch("src.agent.model_service.Gemini")
    @patch("src.agent.model_service.Agent")
    async def test_each_session_is_independent(
        self,
        mock_agent_class: MagicMock,
        mock_gemini: MagicMock,
        mock_db: MagicMock,
        config: MentorConfig,
    ) -> None:
        """Two sessions get distinct ids and separate agents."""
        mock_agent_class.side_effect = lambda **kwargs: MagicMock()
        service = AgnoModelService(config=config)

        first = await service.create_session("prompt", 0.7)
        second = await service.create_session("prompt", 0.7)

        assert first.session_id != second.session_id
        assert first.agent is not second.agent

    async def test_missing_api_key_raises_service_error(self) -> None:
        """Missing key surfaces as ModelServiceError, not a validation error."""
        service = AgnoModelService()

        with (
            patch.dict("os.environ", {}, clear=True),
            pytest.raises(ModelServiceError, match="configuration"),
        ):
            await service.create_session("prompt", 0.7)

    @patch("src.agent.model_service.InMemoryDb")
    @patch("src.agent.model_service.Gemini")
    @patch("src.agent.model_service.Agent")
    async def test_agent_construction_failure_is_wrapped(
        self,
        mock_agent_class: MagicMock,
        mock_gemini: MagicMock,
        mock_db: MagicMock,
        config: MentorConfig,
    ) -> None:
        """Library errors while building the agent become ModelServiceError."""
        mock_gemini.side_effect = ImportError("google-genai not installed")
        service = AgnoModelService(config=config)

        with pytest.raises(ModelServiceError, match="google-genai"):
            await service.create_session("prompt", 0.7)


class TestSend:
    """Tests for AgnoModelService.send."""

    async def test_plain_message_is_sent_as_text(self, config: MentorConfig) -> None:
        """Text payload goes straight to agent.arun with the session id."""
        session = make_session("Welcome!")
        service = AgnoModelService(config=config)

        reply = await service.send(session, TurnPayload(message="Start the session now."))

        assert reply == "Welcome!"
        session.agent.arun.assert_awaited_once_with(
            "Start the session now.",
            session_id="session-1",
        )

    @patch("src.agent.model_service.File")
    async def test_parts_are_sent_as_file_and_text(
        self,
        mock_file: MagicMock,
        config: MentorConfig,
    ) -> None:
        """Inline data is decoded to bytes and passed as a File alongside the text."""
        session = make_session()
        service = AgnoModelService(config=config)
        payload = TurnPayload(
            parts=[
                InlineDataPart(
                    inline_data=InlineData(
                        mime_type="application/pdf",
                        data=base64.b64encode(b"%PDF-1.4 draft").decode(),
                    )
                ),
                TextPart(text="Review my case study"),
            ]
        )

        await service.send(session, payload)

        mock_file.assert_called_once_with(content=b"%PDF-1.4 draft", mime_type="application/pdf")
        session.agent.arun.assert_awaited_once_with(
            "Review my case study",
            session_id="session-1",
            files=[mock_file.return_value],
        )

    async def test_transport_error_is_wrapped(self, config: MentorConfig) -> None:
        """Any exception from agno becomes ModelServiceError."""
        session = make_session()
        session.agent.arun.side_effect = ConnectionError("network down")
        service = AgnoModelService(config=config)

        with pytest.raises(ModelServiceError, match="network down"):
            await service.send(session, TurnPayload(message="Hello"))

    async def test_empty_reply_is_an_error(self, config: MentorConfig) -> None:
        """A response without content is treated as a failure."""
        session = make_session(reply=None)
        service = AgnoModelService(config=config)

        with pytest.raises(ModelServiceError, match="empty"):
            await service.send(session, TurnPayload(message="Hello"))

    async def test_errored_run_is_an_error(self, config: MentorConfig) -> None:
        """Agno returns provider failures as an errored run; its text is not a reply."""
        session = make_session()
        session.agent.arun.return_value = MagicMock(
            status=RunStatus.error,
            content="[Errno -2] Name or service not known",
        )
        service = AgnoModelService(config=config)

        with pytest.raises(ModelServiceError, match="Name or service not known"):
            await service.send(session, TurnPayload(message="Hello"))


class TestSessionManagerWithAgno:
    """Errored Agno runs reach the user as the fixed mentor messages."""

    @patch("src.agent.model_service.InMemoryDb")
    @patch("src.agent.model_service.Gemini")
    @patch("src.agent.model_service.Agent")
    async def test_errored_opening_run_seeds_connection_error(
        self,
        mock_agent_class: MagicMock,
        mock_gemini: MagicMock,
        mock_db: MagicMock,
        config: MentorConfig,
    ) -> None:
        mock_agent_class.return_value.arun = AsyncMock(
            return_value=MagicMock(status=RunStatus.error, content="invalid API key")
        )
        manager = SessionManager(AgnoModelService(config=config))

        await manager.initialize()

        assert [turn.text for turn in manager.conversation] == [CONNECTION_ERROR_MESSAGE]
        assert manager.is_ready is False

    @patch("src.agent.model_service.InMemoryDb")
    @patch("src.agent.model_service.Gemini")
    @patch("src.agent.model_service.Agent")
    async def test_errored_turn_appends_processing_error(
        self,
        mock_agent_class: MagicMock,
        mock_gemini: MagicMock,
        mock_db: MagicMock,
        config: MentorConfig,
    ) -> None:
        mock_agent_class.return_value.arun = AsyncMock(
            side_effect=[
                MagicMock(status=RunStatus.completed, content="Welcome, I am your mentor."),
                MagicMock(status=RunStatus.error, content="[Errno -2] Name or service not known"),
            ]
        )
        manager = SessionManager(AgnoModelService(config=config))
        await manager.initialize()

        reply = await manager.send_turn("I taught a great module")

        assert reply == PROCESSING_ERROR_MESSAGE
        assert manager.conversation[-1].role == Role.MODEL
        assert manager.conversation[-1].text == PROCESSING_ERROR_MESSAGE
        assert manager.conversation[-2].text == "I taught a great module"
        assert manager.is_awaiting_response is False
