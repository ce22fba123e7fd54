"""Entry point for the VoxRay assistant gateway."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from agents.errors import ConfigurationError
from agents.responder import ResponseGenerator
from agents.turns import TurnProcessor
from api.routes import router as status_router
from api.voxray_routes import router as voxray_router
from config.settings import Settings, get_settings
from llm.factory import build_llm_client

LOGGER = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application, refusing to do so without a completion credential."""

    if settings is None:
        settings = get_settings()
    settings.require_credentials()

    llm = build_llm_client(settings)
    generator = ResponseGenerator(
        llm,
        settings.system_prompt,
        temperature=settings.llm_temperature,
        max_tokens=settings.llm_max_tokens,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await llm.aclose()

    app = FastAPI(
        title="VoxRay Assistant Gateway",
        description="Bridges VoxRay call streams to a chat completion backend.",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.turn_processor = TurnProcessor(generator)
    app.include_router(status_router)
    app.include_router(voxray_router)
    return app


def run() -> None:
    settings = get_settings()

    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)

    try:
        app = create_app(settings)
    except ConfigurationError as exc:
        LOGGER.error("%s", exc.detail)
        raise SystemExit(1) from exc

    LOGGER.info("Starting server on %s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
