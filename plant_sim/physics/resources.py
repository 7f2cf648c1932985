"""Resource consumption and storage model.

Fuel resources draw the fuel-equivalent flow of their blend share; water is
drawn in proportion to electrical output. Storage only depletes: there is no
resupply path.
"""

from dataclasses import dataclass

from plant_sim.types import FuelMode, Resource

# resource -> (capacity, initial level, unit)
DEFAULT_STORAGE = {
    Resource.WATER: (500_000.0, 420_000.0, "m3"),
    Resource.GAS: (200_000.0, 150_000.0, "m3"),
    Resource.ETHANOL: (150_000.0, 110_000.0, "m3"),
    Resource.BIODIESEL: (150_000.0, 95_000.0, "m3"),
    Resource.H2: (50_000.0, 32_000.0, "kg"),
}


def enabled_resources(fuel_mode: FuelMode, water_enabled: bool = True) -> set[Resource]:
    """Resources the selected fuel mode can draw on."""
    enabled = set()
    if fuel_mode in (FuelMode.NATURAL_GAS, FuelMode.FLEX_NG_H2):
        enabled.add(Resource.GAS)
    if fuel_mode in (FuelMode.ETHANOL, FuelMode.BIODIESEL, FuelMode.FLEX_ETHANOL_BIODIESEL):
        enabled.update((Resource.ETHANOL, Resource.BIODIESEL))
    if fuel_mode == FuelMode.FLEX_NG_H2:
        enabled.add(Resource.H2)
    if water_enabled:
        enabled.add(Resource.WATER)
    return enabled


@dataclass
class Storage:
    level: float
    capacity: float
    unit: str = "m3"

    def draw(self, amount: float):
        self.level = min(max(self.level - max(amount, 0.0), 0.0), self.capacity)

    @property
    def fraction(self) -> float:
        return self.level / self.capacity if self.capacity > 0 else 0.0


class ResourceConsumptionModel:
    """Per-resource consumption rate and storage depletion."""

    DEFAULT_PARAMS = {
        "water_per_mw": 0.02,   # m3 per MW per tick
        "low_level_fraction": 0.10,
    }

    def __init__(self, params: dict | None = None, storage: dict | None = None):
        p = {**self.DEFAULT_PARAMS, **(params or {})}
        self.water_per_mw = p["water_per_mw"]
        self.low_level_fraction = p["low_level_fraction"]
        self.storage: dict[Resource, Storage] = {
            res: Storage(level=min(level, cap), capacity=cap, unit=unit)
            for res, (cap, level, unit) in (storage or DEFAULT_STORAGE).items()
        }
        self.rates: dict[Resource, float] = {res: 0.0 for res in Resource}
        self.enabled: set[Resource] = set()

    def step(self, dt: float, fuel_flows: dict[Resource, float], power_output_mw: float,
             fuel_mode: FuelMode, water_enabled: bool = True) -> dict:
        """Deplete storage by one tick of consumption.

        Args:
            dt: Time step in seconds (depletion is per tick).
            fuel_flows: Fuel flow per resource from the fuel model's blend split.
            power_output_mw: Electrical output, drives water draw.
            fuel_mode: Selected fuel mode, decides which resources are enabled.
            water_enabled: Operator toggle for the water circuit.
        """
        self.enabled = enabled_resources(fuel_mode, water_enabled)
        for res in Resource:
            if res not in self.enabled:
                rate = 0.0
            elif res == Resource.WATER:
                rate = max(power_output_mw, 0.0) * self.water_per_mw
            else:
                rate = max(fuel_flows.get(res, 0.0), 0.0)
            self.rates[res] = rate
            if res in self.storage:
                self.storage[res].draw(rate)
        return self.get_state()

    def idle(self):
        self.rates = {res: 0.0 for res in Resource}

    def low_levels(self) -> list[Resource]:
        return [
            res for res, st in self.storage.items()
            if st.fraction < self.low_level_fraction
        ]

    def get_state(self) -> dict:
        return {
            "consumption": {res.value: round(rate, 3) for res, rate in self.rates.items()},
            "storage": {
                res.value: {
                    "level": round(st.level, 1),
                    "capacity": st.capacity,
                    "unit": st.unit,
                }
                for res, st in self.storage.items()
            },
            "enabled": sorted(res.value for res in self.enabled),
        }
