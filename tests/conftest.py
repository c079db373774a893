"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - fake_service: In-process model service that records every payload
    - manager: SessionManager wired to the fake service
    - ready_manager: SessionManager already seeded with the mentor introduction
    - async_client: HTTPX client for the host app
"""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from src.agent.model_service import ModelServiceError
from src.models.schemas import TurnPayload
from src.server.app import create_app
from src.session.manager import SessionManager


class FakeModelService:
    """Model service double implementing the create_session/send contract.

    Replies are taken from ``replies`` in order, falling back to a numbered
    default. Set ``fail_create`` or ``fail_send`` to simulate outages.
    """

    def __init__(self) -> None:
        self.sessions: list[dict] = []
        self.sent: list[TurnPayload] = []
        self.replies: list[str] = []
        self.fail_create = False
        self.fail_send = False

    async def create_session(self, system_instruction: str, temperature: float) -> dict:
        if self.fail_create:
            raise ModelServiceError("unreachable")
        handle = {
            "id": len(self.sessions),
            "system_instruction": system_instruction,
            "temperature": temperature,
        }
        self.sessions.append(handle)
        return handle

    async def send(self, handle: dict, payload: TurnPayload) -> str:
        self.sent.append(payload)
        if self.fail_send:
            raise ModelServiceError("transport failure")
        if self.replies:
            return self.replies.pop(0)
        return f"Mentor reply {len(self.sent)}"


@pytest.fixture
def fake_service() -> FakeModelService:
    """Return a fresh fake model service."""
    return FakeModelService()


@pytest.fixture
def manager(fake_service: FakeModelService) -> SessionManager:
    """Return an uninitialized session manager backed by the fake service."""
    return SessionManager(fake_service)


@pytest.fixture
async def ready_manager(manager: SessionManager) -> SessionManager:
    """Return a session manager whose conversation holds the seed turn."""
    await manager.initialize()
    return manager


@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for the host app.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=create_app())
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
