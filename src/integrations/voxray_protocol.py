"""VoxRay streaming protocol frames.

Inbound frames are decoded into a closed set of models keyed by ``type``;
anything with an unrecognized or missing ``type`` becomes ``UnknownFrame``
rather than an error. The only outbound frame is ``TextFrame``.
"""

from __future__ import annotations

import json
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from agents.errors import FrameDecodeError


class InboundFrame(BaseModel):
    """Common base for decoded frames. Unknown fields are kept but not interpreted."""

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    type: Any = None

    @property
    def extras(self) -> dict[str, Any]:
        return dict(self.model_extra or {})


class SetupFrame(InboundFrame):
    type: Literal["setup"] = "setup"


class PromptFrame(InboundFrame):
    type: Literal["prompt"] = "prompt"
    voice_prompt: str = Field(default="", alias="voicePrompt")

    @field_validator("voice_prompt", mode="before")
    @classmethod
    def coerce_voice_prompt(cls, value: Any) -> str:
        # The platform may omit the utterance or send a non-string value.
        return value if isinstance(value, str) else ""


class InterruptFrame(InboundFrame):
    type: Literal["interrupt"] = "interrupt"


class ErrorFrame(InboundFrame):
    type: Literal["error"] = "error"


class UnknownFrame(InboundFrame):
    pass


Frame = Union[SetupFrame, PromptFrame, InterruptFrame, ErrorFrame, UnknownFrame]

FRAME_TYPES: dict[str, type[InboundFrame]] = {
    "setup": SetupFrame,
    "prompt": PromptFrame,
    "interrupt": InterruptFrame,
    "error": ErrorFrame,
}


class TextFrame(BaseModel):
    """Complete assistant reply sent back to the platform."""

    model_config = ConfigDict(frozen=True)

    type: Literal["text"] = "text"
    token: str
    last: Literal[True] = True


def decode_frame(raw: str | bytes) -> Frame:
    """Decode one wire message, raising ``FrameDecodeError`` if it is not a JSON object."""

    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise FrameDecodeError(f"Invalid JSON: {exc}", payload=raw) from exc

    if not isinstance(data, dict):
        raise FrameDecodeError(
            f"Expected a JSON object, got {type(data).__name__}", payload=raw
        )

    frame_type = data.get("type")
    frame_cls = FRAME_TYPES.get(frame_type) if isinstance(frame_type, str) else None
    try:
        if frame_cls is None:
            return UnknownFrame.model_validate(data)
        return frame_cls.model_validate(data)
    except ValidationError as exc:
        raise FrameDecodeError(str(exc), payload=raw) from exc


def encode_frame(frame: TextFrame) -> str:
    return frame.model_dump_json()
