"""Service status route."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from api.dependencies import get_app_settings
from api.schemas import StatusResponse
from config.settings import Settings

router = APIRouter()


@router.get("/", response_model=StatusResponse)
async def status(settings: Settings = Depends(get_app_settings)) -> StatusResponse:
    return StatusResponse(message=settings.status_message)
