"""Fuel consumption model.

Aggregate fuel flow is derived from electrical output and efficiency only.
Flex-fuel blends are a display split of that flow by the operator mix; the
blend ratio does not change the aggregate (no blended heating value model).
"""

from plant_sim.types import FuelMode, Resource

FUEL_LABELS = {
    FuelMode.NATURAL_GAS: "Natural Gas",
    FuelMode.ETHANOL: "Ethanol",
    FuelMode.BIODIESEL: "Biodiesel",
}


def fuel_consumption(power_output_mw: float, efficiency_pct: float) -> float:
    """Unit-scaled fuel flow (kg/s) for a given output and efficiency."""
    if efficiency_pct <= 0:
        return 0.0
    return (power_output_mw / (efficiency_pct / 100.0)) / 100.0


def blend_components(fuel_mode: FuelMode, h2_pct: float = 0.0,
                     biodiesel_pct: float = 0.0) -> list[tuple[str, Resource, float]]:
    """Blend as ``(label, resource, share_pct)`` tuples, shares summing to 100."""
    if fuel_mode == FuelMode.FLEX_NG_H2:
        return [("NG", Resource.GAS, 100.0 - h2_pct), ("H2", Resource.H2, h2_pct)]
    if fuel_mode == FuelMode.FLEX_ETHANOL_BIODIESEL:
        return [
            ("Ethanol", Resource.ETHANOL, 100.0 - biodiesel_pct),
            ("Biodiesel", Resource.BIODIESEL, biodiesel_pct),
        ]
    resource = {
        FuelMode.NATURAL_GAS: Resource.GAS,
        FuelMode.ETHANOL: Resource.ETHANOL,
        FuelMode.BIODIESEL: Resource.BIODIESEL,
    }[fuel_mode]
    return [(FUEL_LABELS[fuel_mode], resource, 100.0)]


def fuel_title(fuel_mode: FuelMode, h2_pct: float = 0.0, biodiesel_pct: float = 0.0) -> str:
    """Operating-mode caption, e.g. ``NG(80%)/H2(20%)``."""
    components = blend_components(fuel_mode, h2_pct, biodiesel_pct)
    if len(components) == 1:
        return components[0][0]
    return "/".join(f"{label}({share:g}%)" for label, _, share in components)


class FuelConsumptionModel:
    """Fuel flow and blend split for the selected fuel mode."""

    def __init__(self, fuel_mode: FuelMode = FuelMode.NATURAL_GAS,
                 h2_pct: float = 20.0, biodiesel_pct: float = 30.0):
        self.fuel_mode = fuel_mode
        self.h2_pct = h2_pct
        self.biodiesel_pct = biodiesel_pct
        self.consumption = 0.0        # kg/s

    def configure(self, fuel_mode: FuelMode, h2_pct: float, biodiesel_pct: float):
        self.fuel_mode = FuelMode(fuel_mode)
        self.h2_pct = h2_pct
        self.biodiesel_pct = biodiesel_pct

    def step(self, dt: float, power_output_mw: float, efficiency_pct: float) -> dict:
        self.consumption = fuel_consumption(power_output_mw, efficiency_pct)
        return self.get_state()

    def component_flows(self) -> dict[Resource, float]:
        """Aggregate flow split by blend share, keyed by the resource consumed."""
        return {
            resource: self.consumption * share / 100.0
            for _, resource, share in blend_components(
                self.fuel_mode, self.h2_pct, self.biodiesel_pct
            )
        }

    @property
    def title(self) -> str:
        return fuel_title(self.fuel_mode, self.h2_pct, self.biodiesel_pct)

    def get_state(self) -> dict:
        return {
            "fuel_mode": self.fuel_mode.value,
            "title": self.title,
            "consumption": round(self.consumption, 2),
            "blend": [
                {"fuel": label, "share_pct": share}
                for label, _, share in blend_components(
                    self.fuel_mode, self.h2_pct, self.biodiesel_pct
                )
            ],
        }
