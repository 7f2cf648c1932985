"""Waste heat recovery cascade.

Turbine exhaust heat drives a LiBr absorption chiller (Broad BCT-1500 class,
thermal COP 0.694). The chilled water is split between turbine inlet air
cooling (TIAC), inlet fogging and the data-center cooling loop.
"""

import math
from dataclasses import dataclass

CHILLER_COP = 0.694
CONVENTIONAL_CHILLER_COP = 5.0     # electric chiller, for the avoided-load figure
TOTAL_RACKS = 120
RACK_COOLING_MWT = 3.5             # thermal MW per data-center rack


@dataclass(frozen=True)
class CoolingSplit:
    """Fractions of chiller output per consumer; must sum to 1."""
    tiac: float = 0.40
    fog: float = 0.25
    data_center: float = 0.35

    def __post_init__(self):
        parts = (self.tiac, self.fog, self.data_center)
        if any(x < 0 for x in parts) or not math.isclose(sum(parts), 1.0, abs_tol=1e-9):
            raise ValueError(f"Cooling split must be non-negative and sum to 1, got {parts}")

    def rebalance(self, system: str, pct: float) -> "CoolingSplit":
        """Set TIAC or Fog to ``pct`` percent; the data center takes the rest.

        If the two inlet systems would exceed 100 %, the other inlet system
        is reduced and the data center gets nothing.
        """
        if system not in ("tiac", "fog"):
            raise ValueError(f"Only 'tiac' or 'fog' can be rebalanced, got {system!r}")
        value = min(max(pct, 0.0), 100.0)
        other_name = "fog" if system == "tiac" else "tiac"
        other = getattr(self, other_name) * 100.0

        if value + other > 100.0:
            parts = {system: value, other_name: 100.0 - value, "data_center": 0.0}
        else:
            # float error can leave the remainder a hair below zero
            remainder = max(100.0 - value - other, 0.0)
            parts = {system: value, other_name: other, "data_center": remainder}
        return CoolingSplit(**{k: v / 100.0 for k, v in parts.items()})


@dataclass(frozen=True)
class CascadeState:
    power_input_mw: float = 0.0
    waste_heat_mw: float = 0.0
    cooling_production_mw: float = 0.0
    tiac_mw: float = 0.0
    fog_mw: float = 0.0
    data_center_mw: float = 0.0
    electrical_equivalent_saved_mw: float = 0.0
    potential_active_racks: int = 0


class WasteHeatCascade:
    """Computes the heat -> cooling -> distribution chain for one tick."""

    def __init__(self, split: CoolingSplit | None = None, chiller_cop: float = CHILLER_COP):
        self.split = split or CoolingSplit()
        self.chiller_cop = chiller_cop
        self.state = CascadeState()

    def compute(self, power_output_mw: float, efficiency_pct: float, online: bool) -> CascadeState:
        if not online:
            return CascadeState()

        power_input = power_output_mw / (efficiency_pct / 100.0) if efficiency_pct > 0 else 0.0
        waste_heat = max(power_input - power_output_mw, 0.0)
        cooling = waste_heat * self.chiller_cop
        data_center = cooling * self.split.data_center
        racks = min(int(data_center // RACK_COOLING_MWT), TOTAL_RACKS)

        return CascadeState(
            power_input_mw=power_input,
            waste_heat_mw=waste_heat,
            cooling_production_mw=cooling,
            tiac_mw=cooling * self.split.tiac,
            fog_mw=cooling * self.split.fog,
            data_center_mw=data_center,
            electrical_equivalent_saved_mw=cooling / CONVENTIONAL_CHILLER_COP,
            potential_active_racks=racks,
        )

    def step(self, dt: float, power_output_mw: float, efficiency_pct: float, online: bool) -> dict:
        self.state = self.compute(power_output_mw, efficiency_pct, online)
        return self.get_state()

    def get_state(self) -> dict:
        s = self.state
        return {
            "power_input": round(s.power_input_mw, 1),
            "waste_heat": round(s.waste_heat_mw, 1),
            "cooling_production": round(s.cooling_production_mw, 2),
            "distribution": {
                "tiac": round(s.tiac_mw, 2),
                "fog": round(s.fog_mw, 2),
                "data_center": round(s.data_center_mw, 2),
            },
            "split": {
                "tiac": self.split.tiac,
                "fog": self.split.fog,
                "data_center": self.split.data_center,
            },
            "electrical_equivalent_saved": round(s.electrical_equivalent_saved_mw, 2),
            "potential_active_racks": s.potential_active_racks,
        }
