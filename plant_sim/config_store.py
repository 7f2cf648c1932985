"""Named per-plant configuration with default-merge semantics.

Persisted layout (one JSON string per key in a key-value backend):
    app-config          {plant name: PlantConfiguration}
    app-selected-plant  plant name
    app-user-settings   {"language": "PT"}

Persistence is best effort: unreadable or corrupt data falls back to the
built-in defaults and write failures only log, so the simulation keeps
running on in-memory state either way.
"""

import json
import logging
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from plant_sim.plants import DEFAULT_PLANT, PLANT_DB, default_fuel_mode
from plant_sim.types import FuelMode, TurbineStatus

logger = logging.getLogger(__name__)

CONFIG_KEY = "app-config"
SELECTED_PLANT_KEY = "app-selected-plant"
SETTINGS_KEY = "app-user-settings"

DEFAULT_LANGUAGE = "PT"
DEFAULT_TURBINE_IDS = (1, 2, 3, 4, 5)


class PersistenceError(Exception):
    """Raised by key-value backends when the underlying store fails."""


class KeyValueBackend(Protocol):
    def get(self, key: str) -> str | None: ...

    def put(self, key: str, value: str) -> None: ...


class MemoryBackend:
    """Process-local key-value store."""

    def __init__(self, data: dict[str, str] | None = None):
        self.data: dict[str, str] = dict(data or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def put(self, key: str, value: str) -> None:
        self.data[key] = value


class FlexMix(BaseModel):
    """Operator blend percentages for the two flex-fuel modes."""
    h2: float = Field(default=20.0, ge=0.0, le=100.0)
    biodiesel: float = Field(default=30.0, ge=0.0, le=100.0)

    @field_validator("h2", "biodiesel", mode="before")
    @classmethod
    def _clamp_pct(cls, v):
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return min(max(float(v), 0.0), 100.0)
        return v


def _default_turbine_status() -> dict[int, TurbineStatus]:
    return {tid: TurbineStatus.ACTIVE for tid in DEFAULT_TURBINE_IDS}


class PlantConfiguration(BaseModel):
    model_config = ConfigDict(extra="forbid")

    fuel_mode: FuelMode = FuelMode.NATURAL_GAS
    flex_mix: FlexMix = Field(default_factory=FlexMix)
    turbine_status: dict[int, TurbineStatus] = Field(default_factory=_default_turbine_status)
    water_enabled: bool = True

    def status_of(self, turbine_id: int) -> TurbineStatus:
        """Configured status; turbines missing from the map are inactive."""
        return self.turbine_status.get(turbine_id, TurbineStatus.INACTIVE)


class ConfigurationStore:
    """Owns every plant's configuration plus the selected plant and UI language."""

    def __init__(self, backend: KeyValueBackend | None = None,
                 plants: dict | None = None,
                 default_plant: str = DEFAULT_PLANT,
                 default_language: str = DEFAULT_LANGUAGE):
        self.backend = backend if backend is not None else MemoryBackend()
        self._plants = plants if plants is not None else PLANT_DB
        self._default_plant = default_plant
        self._default_language = default_language
        self._configs: dict[str, PlantConfiguration] = {}
        self.selected_plant = default_plant
        self.language = default_language
        self._load_warned = False
        self.load()

    # ------------------------------------------------------------------
    # Plant configuration
    # ------------------------------------------------------------------
    def list_plants(self) -> list[str]:
        return list(self._plants)

    def get(self, plant_name: str) -> PlantConfiguration:
        """Configuration for ``plant_name``, created from defaults on first use."""
        self._check_plant(plant_name)
        config = self._configs.get(plant_name)
        if config is None:
            config = PlantConfiguration(fuel_mode=default_fuel_mode(plant_name))
            self._configs[plant_name] = config
        return config

    def set(self, plant_name: str, partial: dict | None = None, **fields) -> PlantConfiguration:
        """Merge a partial update into the plant's configuration.

        ``flex_mix`` and ``turbine_status`` merge key by key, so updating
        one blend percentage or one turbine leaves the others untouched.
        Raises ``pydantic.ValidationError`` for invalid values.
        """
        updates = {**(partial or {}), **fields}
        data = self.get(plant_name).model_dump()

        for key, value in updates.items():
            if key == "flex_mix" and isinstance(value, dict):
                data["flex_mix"] = {**data["flex_mix"], **value}
            elif key == "turbine_status" and isinstance(value, dict):
                data["turbine_status"] = {
                    **data["turbine_status"],
                    **{int(k): v for k, v in value.items()},
                }
            else:
                data[key] = value

        config = PlantConfiguration.model_validate(data)
        self._configs[plant_name] = config
        self._write(CONFIG_KEY, self.dumps())
        return config

    # ------------------------------------------------------------------
    # Scalars
    # ------------------------------------------------------------------
    def select_plant(self, plant_name: str) -> PlantConfiguration:
        self._check_plant(plant_name)
        self.selected_plant = plant_name
        self._write(SELECTED_PLANT_KEY, json.dumps(plant_name))
        return self.get(plant_name)

    def set_language(self, language: str):
        self.language = language
        self._write(SETTINGS_KEY, json.dumps({"language": language}))

    @property
    def current(self) -> PlantConfiguration:
        return self.get(self.selected_plant)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------
    def dumps(self) -> str:
        return json.dumps({
            name: config.model_dump(mode="json")
            for name, config in self._configs.items()
        })

    @staticmethod
    def loads(raw: str) -> dict[str, PlantConfiguration]:
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError("configuration snapshot must be a JSON object")
        return {name: PlantConfiguration.model_validate(cfg) for name, cfg in data.items()}

    def load(self):
        """Read persisted state; anything unreadable is replaced by defaults."""
        raw = self._read(CONFIG_KEY)
        if raw is not None:
            try:
                self._configs = self.loads(raw)
            except (ValueError, ValidationError) as e:
                self._warn_load("plant configuration", e)
                self._configs = {}

        raw = self._read(SELECTED_PLANT_KEY)
        if raw is not None:
            try:
                name = json.loads(raw)
                self._check_plant(name)
                self.selected_plant = name
            except (ValueError, KeyError, TypeError) as e:
                self._warn_load("selected plant", e)
                self.selected_plant = self._default_plant

        raw = self._read(SETTINGS_KEY)
        if raw is not None:
            try:
                settings = {"language": self._default_language, **json.loads(raw)}
                self.language = str(settings["language"])
            except (ValueError, TypeError) as e:
                self._warn_load("user settings", e)
                self.language = self._default_language

    def _check_plant(self, plant_name: str):
        if plant_name not in self._plants:
            raise KeyError(f"Unknown plant {plant_name!r}")

    def _read(self, key: str) -> str | None:
        try:
            return self.backend.get(key)
        except PersistenceError as e:
            self._warn_load(key, e)
            return None

    def _write(self, key: str, value: str):
        try:
            self.backend.put(key, value)
        except PersistenceError as e:
            logger.warning("Failed to persist %s, keeping in-memory state: %s", key, e)

    def _warn_load(self, what: str, error: Exception):
        if self._load_warned:
            return
        self._load_warned = True
        logger.warning("Failed to load %s, falling back to defaults: %s", what, error)
