"""Liveness endpoint."""

from fastapi import APIRouter

from backend.core.config import settings
from backend.services.plant_manager import PlantManager

router = APIRouter()
manager = PlantManager()


@router.get("/health")
async def health():
    return {
        "status": "ok",
        "version": settings.VERSION,
        "clock_running": manager.running,
    }
