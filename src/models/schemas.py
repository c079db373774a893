from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class Role(str, Enum):
    """Author of a conversation turn."""

    USER = "user"
    MODEL = "model"


class ConversationTurn(BaseModel):
    """A single rendered turn in the conversation.

    Attributes:
        role: Who authored the turn.
        text: Displayed content.
        attachment_name: Name of the file sent with this turn, for display only.
    """

    model_config = ConfigDict(frozen=True)

    role: Role
    text: str
    attachment_name: str | None = None


class PendingAttachment(BaseModel):
    """A file selected by the user, encoded and waiting for the next send.

    Attributes:
        name: Original filename.
        mime_type: Declared content type, taken verbatim.
        payload: Base64 file content (data URL body without its prefix).
    """

    model_config = ConfigDict(frozen=True)

    name: str
    mime_type: str
    payload: str


class _WireModel(BaseModel):
    """Parts serialize with camelCase keys, matching the model API."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class InlineData(_WireModel):
    mime_type: str
    data: str


class InlineDataPart(_WireModel):
    inline_data: InlineData


class TextPart(_WireModel):
    text: str


class TurnPayload(_WireModel):
    """Content submitted to the model for one turn.

    Exactly one of ``message`` (plain text) or ``parts`` (multimodal) is set.
    Multimodal turns carry exactly two parts: one inline data part, then one text part.
    """

    message: str | None = None
    parts: list[InlineDataPart | TextPart] | None = None

    @model_validator(mode="after")
    def check_shape(self) -> "TurnPayload":
        if (self.message is None) == (self.parts is None):
            raise ValueError("TurnPayload requires exactly one of message or parts")
        if self.parts is not None and (
            len(self.parts) != 2
            or not isinstance(self.parts[0], InlineDataPart)
            or not isinstance(self.parts[1], TextPart)
        ):
            raise ValueError("TurnPayload parts must be one inline data part followed by one text part")
        return self

    @property
    def inline_parts(self) -> list[InlineDataPart]:
        return [p for p in self.parts or [] if isinstance(p, InlineDataPart)]

    @property
    def text_parts(self) -> list[TextPart]:
        return [p for p in self.parts or [] if isinstance(p, TextPart)]


class SessionState(BaseModel):
    """Mutable state of one chat session.

    Attributes:
        conversation: Ordered, append-only list of turns.
        pending_attachment: File waiting to be sent with the next turn.
        is_awaiting_response: True while a request to the model is in flight.
    """

    conversation: list[ConversationTurn] = Field(default_factory=list)
    pending_attachment: PendingAttachment | None = None
    is_awaiting_response: bool = False
