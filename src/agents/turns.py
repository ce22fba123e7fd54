"""Turn processing: one prompt frame in, one text frame out."""

from __future__ import annotations

import logging
from typing import Protocol

from integrations.voxray_protocol import PromptFrame, TextFrame

LOGGER = logging.getLogger(__name__)


class ReplySource(Protocol):
    async def generate(self, utterance: str) -> str:  # pragma: no cover - protocol stub
        ...


class TurnProcessor:
    """Transport-agnostic bridge between decoded prompts and reply frames."""

    def __init__(self, generator: ReplySource) -> None:
        self._generator = generator

    async def process(self, frame: PromptFrame) -> TextFrame:
        utterance = frame.voice_prompt
        if not utterance:
            LOGGER.info("Prompt frame carried no voicePrompt; forwarding an empty utterance")
        reply = await self._generator.generate(utterance)
        return TextFrame(token=reply)
