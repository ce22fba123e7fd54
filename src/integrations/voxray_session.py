"""Per-call session over the VoxRay streaming WebSocket.

One ``VoxraySession`` owns one accepted connection and is the only writer to
it. Every inbound frame is handled in its own asyncio task so a slow
completion call never blocks the receive loop.

Within a session, prompts are not serialized unless ``serialize_turns`` is
set: two prompts received back to back run concurrently and their replies are
written in completion order. With ``serialize_turns`` a per-session lock makes
replies go out in arrival order. ``interrupt`` never cancels an in-flight
turn; closing the connection cancels all of them.
"""

from __future__ import annotations

import asyncio
import logging
import secrets
from typing import Protocol

from fastapi import WebSocket, WebSocketDisconnect

from agents.errors import FrameDecodeError
from integrations.voxray_protocol import (
    ErrorFrame,
    InterruptFrame,
    PromptFrame,
    SetupFrame,
    TextFrame,
    UnknownFrame,
    decode_frame,
    encode_frame,
)

LOGGER = logging.getLogger(__name__)


class TurnHandler(Protocol):
    async def process(self, frame: PromptFrame) -> TextFrame:  # pragma: no cover - protocol stub
        ...


class VoxraySession:
    def __init__(
        self,
        websocket: WebSocket,
        turn_processor: TurnHandler,
        *,
        serialize_turns: bool = False,
    ) -> None:
        self.session_id = secrets.token_hex(4)
        self._websocket = websocket
        self._turns = turn_processor
        self._turn_lock = asyncio.Lock() if serialize_turns else None
        self._tasks: set[asyncio.Task] = set()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def run(self) -> None:
        """Accept the connection and pump frames until the peer disconnects."""

        await self._websocket.accept()
        self.on_connect()
        try:
            while True:
                message = await self._websocket.receive()
                if message["type"] == "websocket.disconnect":
                    break
                raw = message.get("text")
                if raw is None:
                    raw = message.get("bytes")
                if raw is None:
                    continue
                self.on_frame(raw)
        finally:
            await self.on_close()

    def on_connect(self) -> None:
        LOGGER.info("[%s] Client connected", self.session_id)

    def on_frame(self, raw: str | bytes) -> asyncio.Task | None:
        """Schedule handling of one raw frame and return its task."""

        if self._closed:
            LOGGER.debug("[%s] Ignoring frame received after close", self.session_id)
            return None
        task = asyncio.create_task(self._run_frame(raw))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def on_close(self) -> None:
        if self._closed:
            return
        self._closed = True
        in_flight = [task for task in self._tasks if not task.done()]
        for task in in_flight:
            task.cancel()
        if in_flight:
            await asyncio.gather(*in_flight, return_exceptions=True)
            LOGGER.info("[%s] Abandoned %d in-flight turn(s)", self.session_id, len(in_flight))
        LOGGER.info("[%s] Client disconnected.", self.session_id)

    async def _run_frame(self, raw: str | bytes) -> None:
        try:
            await self.handle_frame(raw)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            LOGGER.exception("[%s] Frame handling failed: %s", self.session_id, exc)

    async def handle_frame(self, raw: str | bytes) -> None:
        try:
            frame = decode_frame(raw)
        except FrameDecodeError as exc:
            LOGGER.error("[%s] Error parsing message: %s Message: %r", self.session_id, exc.detail, raw)
            return

        LOGGER.debug("[%s] Data: %s", self.session_id, frame.model_dump(by_alias=True))

        if isinstance(frame, SetupFrame):
            self._on_setup(frame)
        elif isinstance(frame, PromptFrame):
            await self._on_prompt(frame)
        elif isinstance(frame, InterruptFrame):
            self._on_interrupt(frame)
        elif isinstance(frame, ErrorFrame):
            self._on_error(frame)
        elif isinstance(frame, UnknownFrame):
            self._on_unknown(frame)
        else:  # pragma: no cover - every decoded frame is one of the above
            raise TypeError(f"Unhandled frame model: {type(frame).__name__}")

    def _on_setup(self, frame: SetupFrame) -> None:
        LOGGER.info("[%s] Received setup", self.session_id)

    async def _on_prompt(self, frame: PromptFrame) -> None:
        LOGGER.info("[%s] Received prompt", self.session_id)
        if self._turn_lock is None:
            reply = await self._turns.process(frame)
            await self._send(reply)
            return

        async with self._turn_lock:
            reply = await self._turns.process(frame)
            await self._send(reply)

    def _on_interrupt(self, frame: InterruptFrame) -> None:
        LOGGER.warning("[%s] Received interruption %s", self.session_id, frame.extras)

    def _on_error(self, frame: ErrorFrame) -> None:
        LOGGER.error("[%s] Received error %s", self.session_id, frame.extras)

    def _on_unknown(self, frame: UnknownFrame) -> None:
        LOGGER.info("[%s] Received Non-VoxRay Event: %r %s", self.session_id, frame.type, frame.extras)

    async def _send(self, frame: TextFrame) -> None:
        if self._closed:
            LOGGER.info("[%s] Connection closed; dropping reply", self.session_id)
            return
        try:
            await self._websocket.send_text(encode_frame(frame))
        except (WebSocketDisconnect, RuntimeError, OSError) as exc:
            LOGGER.warning("[%s] Could not deliver reply: %s", self.session_id, exc)
            return
        LOGGER.info("[%s] Sent response: %s", self.session_id, frame.token)
