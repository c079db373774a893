"""FastAPI host for the mentor UI."""

from src.server.app import create_app

__all__ = ["create_app"]
