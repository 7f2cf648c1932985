"""Plant configuration endpoints."""

from fastapi import APIRouter, HTTPException

from backend.api.models.schemas import ConfigUpdate, LanguageSetting
from backend.services.plant_manager import PlantManager
from plant_sim.config_store import PlantConfiguration

router = APIRouter()
manager = PlantManager()


@router.get("/plants")
async def list_plants():
    store = manager.simulation.config_store
    return {"plants": store.list_plants(), "selected": store.selected_plant}


@router.get("/settings/language", response_model=LanguageSetting)
async def get_language():
    return LanguageSetting(language=manager.simulation.config_store.language)


@router.put("/settings/language", response_model=LanguageSetting)
async def set_language(setting: LanguageSetting):
    manager.simulation.config_store.set_language(setting.language)
    return setting


@router.get("/{plant_name}", response_model=PlantConfiguration)
async def get_config(plant_name: str):
    try:
        return manager.simulation.config_store.get(plant_name)
    except KeyError:
        raise HTTPException(status_code=404, detail="Plant not found")


@router.patch("/{plant_name}", response_model=PlantConfiguration)
async def update_config(plant_name: str, update: ConfigUpdate):
    """Merge a partial configuration into the plant's stored one."""
    try:
        return manager.simulation.update_config(
            plant_name, update.model_dump(exclude_none=True)
        )
    except KeyError:
        raise HTTPException(status_code=404, detail="Plant not found")
