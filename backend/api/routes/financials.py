"""Plant economics."""

from fastapi import APIRouter

from backend.services.plant_manager import PlantManager

router = APIRouter()
manager = PlantManager()


@router.get("")
async def get_financials():
    """Monthly revenue, cost, carbon credits and the revenue trend."""
    return manager.simulation.snapshot.financials
