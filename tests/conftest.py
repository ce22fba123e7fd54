from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = REPO_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))


class FakeReplySource:
    """Stands in for ResponseGenerator; records every utterance it is given."""

    def __init__(self, reply: str = "Hey! Thanks for reaching out.") -> None:
        self.reply = reply
        self.utterances: list[str] = []

    async def generate(self, utterance: str) -> str:
        self.utterances.append(utterance)
        return self.reply


class EchoReplySource:
    async def generate(self, utterance: str) -> str:
        return f"echo: {utterance}"


class FakeWebSocket:
    """Queue-backed stand-in for a Starlette WebSocket."""

    def __init__(self) -> None:
        self.accepted = False
        self.inbox: asyncio.Queue[dict] = asyncio.Queue()
        self.outbox: asyncio.Queue[str] = asyncio.Queue()

    async def accept(self) -> None:
        self.accepted = True

    async def receive(self) -> dict:
        return await self.inbox.get()

    async def send_text(self, data: str) -> None:
        await self.outbox.put(data)

    def push_text(self, text: str) -> None:
        self.inbox.put_nowait({"type": "websocket.receive", "text": text})

    def push_bytes(self, data: bytes) -> None:
        self.inbox.put_nowait({"type": "websocket.receive", "bytes": data})

    def disconnect(self) -> None:
        self.inbox.put_nowait({"type": "websocket.disconnect", "code": 1000})

    def sent(self) -> list[str]:
        items = []
        while not self.outbox.empty():
            items.append(self.outbox.get_nowait())
        return items


@pytest.fixture()
def settings():
    from config.settings import Settings

    return Settings(_env_file=None, openai_api_key="sk-test")


@pytest.fixture()
def app(settings):
    from main import create_app

    return create_app(settings)


@pytest.fixture()
def reply_source() -> FakeReplySource:
    return FakeReplySource()


@pytest.fixture()
def client(app, reply_source):
    # Override the turn processor so tests never reach the completion service.
    import api.dependencies as deps
    from agents.turns import TurnProcessor

    app.dependency_overrides[deps.get_turn_processor] = lambda: TurnProcessor(reply_source)

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
