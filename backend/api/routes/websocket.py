"""WebSocket route - plant snapshot streaming."""

import asyncio
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from backend.core.config import settings
from backend.services.plant_manager import PlantManager

logger = logging.getLogger(__name__)

router = APIRouter()
manager = PlantManager()


@router.websocket("/state")
async def plant_stream(websocket: WebSocket):
    """Push the committed plant snapshot every ``WS_PUSH_INTERVAL`` seconds."""
    await websocket.accept()
    try:
        while True:
            await websocket.send_json(manager.simulation.snapshot.to_dict())
            await asyncio.sleep(settings.WS_PUSH_INTERVAL)
    except WebSocketDisconnect:
        logger.debug("Plant stream client disconnected")
