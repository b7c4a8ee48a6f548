"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from iconsmith import __version__
from iconsmith.config import Settings
from iconsmith.dependencies import get_settings
from iconsmith.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(settings: Settings = Depends(get_settings)) -> HealthResponse:
    return HealthResponse(
        status="ok",
        version=__version__,
        output_directory=settings.output_directory,
    )
