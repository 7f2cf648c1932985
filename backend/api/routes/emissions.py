"""Emissions readings and outlook."""

from fastapi import APIRouter, Query

from backend.api.models.schemas import ForecastPoint
from backend.services.plant_manager import PlantManager

router = APIRouter()
manager = PlantManager()


@router.get("")
async def get_emissions():
    return manager.simulation.snapshot.emissions


@router.get("/forecast", response_model=list[ForecastPoint])
async def get_forecast(days: int = Query(default=7, ge=1, le=30)):
    """Multi-day outlook compounded from the latest sample."""
    if days == 7:
        return list(manager.simulation.snapshot.emissions_forecast)
    return manager.simulation.emissions.forecast(days)
