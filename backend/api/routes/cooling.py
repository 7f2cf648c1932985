"""Waste heat cascade endpoints."""

from fastapi import APIRouter

from backend.api.models.schemas import CoolingRebalance, CoolingSplitState
from backend.services.plant_manager import PlantManager

router = APIRouter()
manager = PlantManager()


@router.get("")
async def get_cascade():
    return manager.simulation.snapshot.cascade


@router.put("/split", response_model=CoolingSplitState)
async def rebalance_split(update: CoolingRebalance):
    """Change the TIAC or Fog share; the data center absorbs the rest."""
    split = manager.simulation.rebalance_cooling(update.system, update.pct)
    return CoolingSplitState(tiac=split.tiac, fog=split.fog, data_center=split.data_center)
