"""FastAPI application factory and configuration.

Hosts the NiceGUI chat page and a health check, with a startup
configuration check and CORS middleware.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from src.agent.config import get_mentor_config

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Check mentor configuration on startup.

    A missing or invalid API key does not stop the server. The chat page
    still loads and each session shows the connection error turn, so the
    problem is reported once here where an operator will see it.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    logger.info("Starting RITE Digital Mentor...")
    try:
        config = get_mentor_config()
    except ValidationError as e:
        logger.warning(f"Mentor configuration is invalid, sessions will fail to start: {e}")
    else:
        logger.info(f"Mentor model: {config.model_name}")
    yield
    logger.info("Shutting down RITE Digital Mentor...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="RITE Digital Mentor",
        description=(
            "Senior Fellowship (Descriptor 3) mentor chat for the RITE scheme. "
            "Forwards messages and draft documents to a Gemini model role-playing "
            "a digital mentor."
        ),
        version="0.1.0",
        docs_url="/docs",
        redoc_url=None,
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "rite-mentor"}

    return application
