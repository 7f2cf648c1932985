"""Thermal plant catalog.

Declared capacity and primary fuels for each selectable plant. Only the
selected plant is simulated; the rest are configuration records.
"""

from plant_sim.types import FuelMode

DEFAULT_PLANT = "MAUAX Bio PowerPlant (standard)"

PLANT_DB = {
    "MAUAX Bio PowerPlant (standard)": {
        "capacity_mw": 2500.0,
        "fuels": ("natural_gas", "h2", "ethanol", "biodiesel"),
        "flex": True,            # designed for blended operation
        "cycle": "combined",
        "description": "Multi-fuel combined-cycle plant with trigeneration",
    },
    "MAUAX Bio PowerPlant (upgrade)": {
        "capacity_mw": 1600.0,
        "fuels": ("ethanol", "biodiesel"),
        "flex": True,
        "cycle": "combined",
        "description": "Retrofit of an open-cycle unit to ethanol/biodiesel blending",
    },
    "UTE Norte Fluminense": {
        "capacity_mw": 869.0,
        "fuels": ("natural_gas",),
        "flex": False,
        "cycle": "combined",
        "description": "Natural gas combined-cycle plant",
    },
    "UTE Juiz de Fora": {
        "capacity_mw": 87.0,
        "fuels": ("natural_gas", "ethanol"),
        "flex": False,
        "cycle": "combined",
        "description": "Dual-fuel plant with ethanol-capable turbines",
    },
    "UTE Biodiesel Piloto": {
        "capacity_mw": 120.0,
        "fuels": ("biodiesel",),
        "flex": False,
        "cycle": "open",
        "description": "Biodiesel peaking plant",
    },
}


def plant_capacity(name: str) -> float:
    try:
        return PLANT_DB[name]["capacity_mw"]
    except KeyError:
        raise KeyError(f"Unknown plant {name!r}") from None


def default_fuel_mode(name: str) -> FuelMode:
    """Fuel mode a plant starts in, from its declared primary fuels."""
    plant = PLANT_DB.get(name, {})
    fuels = plant.get("fuels", ())
    if plant.get("flex"):
        if "natural_gas" in fuels and "h2" in fuels:
            return FuelMode.FLEX_NG_H2
        if "ethanol" in fuels and "biodiesel" in fuels:
            return FuelMode.FLEX_ETHANOL_BIODIESEL
    if "natural_gas" in fuels:
        return FuelMode.NATURAL_GAS
    if "ethanol" in fuels:
        return FuelMode.ETHANOL
    if "biodiesel" in fuels:
        return FuelMode.BIODIESEL
    return FuelMode.NATURAL_GAS
