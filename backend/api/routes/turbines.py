"""Turbine fleet endpoints: telemetry and maintenance actions."""

from fastapi import APIRouter, HTTPException

from backend.api.models.schemas import MaintenanceScoreUpdate, TurbineState
from backend.services.plant_manager import PlantManager

router = APIRouter()
manager = PlantManager()


def _turbine_state(turbine_id: int) -> dict:
    for turbine in manager.simulation.snapshot.turbines:
        if turbine["id"] == turbine_id:
            return turbine
    raise HTTPException(status_code=404, detail="Turbine not found")


@router.get("", response_model=list[TurbineState])
async def list_turbines():
    return list(manager.simulation.snapshot.turbines)


@router.put("/{turbine_id}/maintenance-score", response_model=TurbineState)
async def set_maintenance_score(turbine_id: int, update: MaintenanceScoreUpdate):
    try:
        manager.simulation.set_maintenance_score(turbine_id, update.score)
    except KeyError:
        raise HTTPException(status_code=404, detail="Turbine not found")
    return _turbine_state(turbine_id)


@router.post("/{turbine_id}/maintenance", response_model=TurbineState)
async def perform_maintenance(turbine_id: int):
    """Reset the turbine's maintenance score after servicing."""
    try:
        manager.simulation.perform_maintenance(turbine_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Turbine not found")
    return _turbine_state(turbine_id)
