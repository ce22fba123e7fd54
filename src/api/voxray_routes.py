"""VoxRay call control and streaming endpoints.

- ``/incoming-call`` answers the platform's call webhook with a control
  document pointing it at the streaming endpoint.
- ``/websocket`` is the streaming endpoint itself; each connection gets its
  own ``VoxraySession``.
"""

from __future__ import annotations

import logging
from xml.sax.saxutils import escape

from fastapi import APIRouter, Depends, Response, WebSocket

from agents.turns import TurnProcessor
from api.dependencies import get_app_settings, get_turn_processor
from config.settings import Settings
from integrations.voxray_session import VoxraySession

LOGGER = logging.getLogger(__name__)

router = APIRouter(tags=["voxray"])

CALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]

_ATTR_ENTITIES = {'"': "&quot;"}


def _attr(value: str) -> str:
    return escape(value, _ATTR_ENTITIES)


def _twiml_connect_voxray(*, action_url: str, stream_url: str, greeting: str) -> str:
    return (
        "<?xml version=\"1.0\" encoding=\"UTF-8\"?>\n"
        "<Response>\n"
        f"  <Connect action=\"{_attr(action_url)}\">\n"
        f"    <Voxray url=\"{_attr(stream_url)}\" welcomeGreeting=\"{_attr(greeting)}\" />\n"
        "  </Connect>\n"
        "</Response>\n"
    )


@router.api_route("/incoming-call", methods=CALL_METHODS)
async def incoming_call(settings: Settings = Depends(get_app_settings)) -> Response:
    xml = _twiml_connect_voxray(
        action_url=settings.action_url,
        stream_url=settings.stream_url,
        greeting=settings.welcome_greeting,
    )
    return Response(content=xml, media_type="text/xml")


@router.websocket("/websocket")
async def voxray_stream(
    websocket: WebSocket,
    settings: Settings = Depends(get_app_settings),
    turn_processor: TurnProcessor = Depends(get_turn_processor),
) -> None:
    session = VoxraySession(
        websocket,
        turn_processor,
        serialize_turns=settings.serialize_turns,
    )
    await session.run()
