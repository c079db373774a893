"""RITE Digital Mentor - Senior Fellowship (Descriptor 3) application coach.

Combines Agno with Gemini for the mentor conversation, NiceGUI for the chat
page, FastAPI for hosting, and Pydantic for data validation.

Components:
    - agent: Mentor persona, configuration and the model service
    - session: Chat session state machine and attachment handling
    - models: Conversation and payload schemas
    - ui: Web interface for chat interactions
    - server: FastAPI host and health check
"""

__version__ = "0.1.0"
