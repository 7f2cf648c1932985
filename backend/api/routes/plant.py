"""Live plant endpoints.

Read the committed snapshot, switch the plant on/off and select which
catalog plant is simulated.
"""

from fastapi import APIRouter, HTTPException

from backend.api.models.schemas import PlantSelect, PlantState, PlantStatusUpdate
from backend.services.plant_manager import PlantManager

router = APIRouter()
manager = PlantManager()


@router.get("/state", response_model=PlantState)
async def get_plant_state():
    """Current plant snapshot."""
    return manager.simulation.snapshot.to_dict()


@router.post("/status", response_model=PlantState)
async def set_plant_status(update: PlantStatusUpdate):
    """Switch the plant ONLINE, OFFLINE or to MAINTENANCE."""
    snapshot = manager.simulation.set_plant_status(update.status)
    return snapshot.to_dict()


@router.post("/select", response_model=PlantState)
async def select_plant(params: PlantSelect):
    """Make another catalog plant the live one."""
    try:
        snapshot = manager.simulation.select_plant(params.plant)
    except KeyError:
        raise HTTPException(status_code=404, detail="Plant not found")
    return snapshot.to_dict()


@router.get("/history")
async def get_plant_history(last: int | None = None):
    """Rolling trend of power, efficiency, fuel flow and dry bulb."""
    return {"records": manager.simulation.history.records(last)}
