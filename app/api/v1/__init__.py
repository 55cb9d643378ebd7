"""API v1 package initialization."""

from fastapi import APIRouter

from app.api.v1 import health, subtitles

# Create v1 router
api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(subtitles.router, prefix="/subtitles", tags=["subtitles"])

__all__ = ["api_router"]
