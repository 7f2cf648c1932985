"""Thermal Plant Simulation Engine

FastAPI backend for a real-time combined-cycle plant with waste-heat reuse.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.core.config import settings
from backend.api.routes import (
    alerts,
    config,
    cooling,
    data_center,
    emissions,
    financials,
    health,
    plant,
    turbines,
    websocket,
)
from backend.services.plant_manager import PlantManager

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""
    manager = PlantManager()
    logger.info("Starting %s v%s", settings.PROJECT_NAME, settings.VERSION)
    await manager.start()
    yield
    await manager.stop()
    logger.info("Shutting down %s", settings.PROJECT_NAME)


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="Combined-cycle thermal plant simulation with waste-heat cascade",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes
app.include_router(health.router, tags=["health"])
app.include_router(
    plant.router,
    prefix=f"{settings.API_V1_STR}/plant",
    tags=["plant"],
)
app.include_router(
    config.router,
    prefix=f"{settings.API_V1_STR}/config",
    tags=["config"],
)
app.include_router(
    turbines.router,
    prefix=f"{settings.API_V1_STR}/turbines",
    tags=["turbines"],
)
app.include_router(
    cooling.router,
    prefix=f"{settings.API_V1_STR}/cooling",
    tags=["cooling"],
)
app.include_router(
    alerts.router,
    prefix=f"{settings.API_V1_STR}/alerts",
    tags=["alerts"],
)
app.include_router(
    emissions.router,
    prefix=f"{settings.API_V1_STR}/emissions",
    tags=["emissions"],
)
app.include_router(
    financials.router,
    prefix=f"{settings.API_V1_STR}/financials",
    tags=["financials"],
)
app.include_router(
    data_center.router,
    prefix=f"{settings.API_V1_STR}/data-center",
    tags=["data-center"],
)
app.include_router(
    websocket.router,
    prefix=f"{settings.API_V1_STR}/ws",
    tags=["websocket"],
)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("backend.main:app", host=settings.HOST, port=settings.PORT, reload=settings.RELOAD)
