"""Data-center electrical and cooling loads."""

from fastapi import APIRouter

from backend.services.plant_manager import PlantManager

router = APIRouter()
manager = PlantManager()


@router.get("")
async def get_data_center():
    return manager.simulation.snapshot.data_center
