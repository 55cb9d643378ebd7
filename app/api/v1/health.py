"""Health check endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.core.config import Settings, get_settings
from app.schemas import HealthResponse
from app.services.encodings import supported_encodings

router = APIRouter()


@router.get("/", response_model=HealthResponse)
@router.get("/health", response_model=HealthResponse)
async def health_check(settings: Annotated[Settings, Depends(get_settings)]):
    """Report service status, supported encodings and available endpoints."""
    endpoints = {
        "subtitles": [
            "POST /api/v1/subtitles/analyze - Analyze SRT content",
            "POST /api/v1/subtitles/upload - Upload and analyze an SRT file",
            "POST /api/v1/subtitles/fix - Apply batch fixes to SRT content",
            "POST /api/v1/subtitles/export - Download fixed SRT in a chosen encoding",
        ],
        "health": [
            "GET /api/v1/health - Service health check",
        ],
    }

    return HealthResponse(
        service=settings.app_name,
        status="running",
        version=settings.app_version,
        authentication="enabled" if settings.api_key else "disabled",
        encodings=supported_encodings(settings),
        endpoints=endpoints,
    )
