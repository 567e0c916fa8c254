"""WebSocket Frame Schemas: inbound frame validation and outbound frame builders.

Invariants:
    - parse_inbound_frame never raises: every payload maps to exactly one FrameParse
    - Non-JSON, or a "message" frame without string content → error
    - Valid JSON that is not an object, or any other "type" → ignored (no state
      change, no reply)
    - Outbound message frames always carry the stored ChatMessage, never raw text

Design Decisions:
    - Two-step validation: a loose envelope decides ignore vs process, then a
      strict MessageFrame validates only frames we act on
"""

from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, StrictStr, ValidationError

from chatbot.core.domain_types import ChatMessage

MESSAGE_FRAME_TYPE = "message"


class FrameEnvelope(BaseModel):
    """Any JSON object; type is optional so unknown shapes can be ignored."""
    model_config = ConfigDict(extra="allow")
    type: Any = None


class MessageFrame(BaseModel):
    """A user chat message: {"type": "message", "content": "<text>"}."""
    model_config = ConfigDict(extra="ignore")
    type: Literal["message"]
    content: StrictStr


@dataclass(frozen=True)
class FrameParse:
    """Tagged result of inbound frame validation."""
    frame: MessageFrame | None = None
    error: str | None = None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @property
    def is_ignored(self) -> bool:
        return self.frame is None and self.error is None


def parse_inbound_frame(raw: str | bytes) -> FrameParse:
    try:
        envelope = FrameEnvelope.model_validate_json(raw)
    except ValidationError as e:
        if _is_non_object_json(e):
            return FrameParse()
        return FrameParse(error=_first_error(e))
    if envelope.type != MESSAGE_FRAME_TYPE:
        return FrameParse()
    try:
        frame = MessageFrame.model_validate(envelope.model_dump())
    except ValidationError as e:
        return FrameParse(error=_first_error(e))
    return FrameParse(frame=frame)


def message_frame(message: ChatMessage) -> dict:
    return {"type": MESSAGE_FRAME_TYPE, "message": message.to_dict()}


def _is_non_object_json(e: ValidationError) -> bool:
    # Parsed JSON that is not an object fails the envelope with model_type
    return any(err["type"] == "model_type" for err in e.errors())


def _first_error(e: ValidationError) -> str:
    errors = e.errors()
    return errors[0]["msg"] if errors else str(e)
