"""Mentor configuration with environment variable loading.

Pydantic-based configuration for the Gemini-backed mentor agent.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()


def _api_key_from_env() -> str:
    return os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY") or os.getenv("API_KEY", "")


class MentorConfig(BaseModel):
    """Configuration for the mentor's model backend.

    Attributes:
        api_key: Gemini API key.
        model_name: Gemini model identifier.
        num_history_runs: Past turns replayed to the model as context.
    """

    api_key: str = Field(
        default_factory=_api_key_from_env,
        description="API key for the Gemini API",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
        description="Model to use",
    )
    num_history_runs: int = Field(
        default_factory=lambda: int(os.getenv("MENTOR_HISTORY_RUNS", "50")),
        ge=1,
        le=500,
        description="Number of previous turns included in each request",
    )

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError("API key required. Set GEMINI_API_KEY in .env")
        return v.strip()


def get_mentor_config() -> MentorConfig:
    """Create mentor configuration from environment.

    Raises:
        ValidationError: If no API key is set.
    """
    return MentorConfig()
