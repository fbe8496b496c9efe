"""Router exposing basic system endpoints."""
from __future__ import annotations

from fastapi import APIRouter

from app.config import get_settings


router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("/status")
async def get_status() -> dict[str, str]:
    """Return a minimal status payload with the active weight unit."""
    settings = get_settings()
    return {
        "status": "online",
        "default_weight_unit": settings.default_weight_unit,
    }
