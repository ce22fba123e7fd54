"""Shared FastAPI dependencies.

Components are built once in ``main.create_app`` and stored on ``app.state``;
these accessors hand them to routes and are the seams tests override.
"""

from __future__ import annotations

from fastapi.requests import HTTPConnection

from agents.turns import TurnProcessor
from config.settings import Settings


def get_app_settings(connection: HTTPConnection) -> Settings:
    return connection.app.state.settings


def get_turn_processor(connection: HTTPConnection) -> TurnProcessor:
    return connection.app.state.turn_processor
