"""Operator alert endpoints."""

from fastapi import APIRouter, HTTPException

from backend.api.models.schemas import AlertState
from backend.services.plant_manager import PlantManager

router = APIRouter()
manager = PlantManager()


@router.get("", response_model=list[AlertState])
async def list_alerts():
    return list(manager.simulation.snapshot.alerts)


@router.delete("/{alert_id}")
async def dismiss_alert(alert_id: int):
    if not manager.simulation.dismiss_alert(alert_id):
        raise HTTPException(status_code=404, detail="Alert not found")
    return {"status": "dismissed", "alert_id": alert_id}


@router.delete("")
async def clear_alerts():
    manager.simulation.clear_alerts()
    return {"status": "cleared"}
