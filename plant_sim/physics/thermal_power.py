"""Net power output and efficiency model.

Power and efficiency follow a bounded random walk around the committed
values. ISO deration against the 15 C reference ambient is reported as an
informational loss derived from the (already derated) output signal; it is
never subtracted from the output a second time.
"""

import numpy as np


def iso_power_loss(power_output_mw: float, dry_bulb_c: float,
                   reference_temp_c: float = 15.0,
                   loss_per_c: float = 0.007) -> tuple[float, float, float]:
    """Return ``(loss_fraction, ideal_power_mw, power_loss_mw)``.

    0.7 %/C above the ISO reference. A loss fraction outside (0, 1) yields
    no reported loss.
    """
    loss_pct = max(0.0, dry_bulb_c - reference_temp_c) * loss_per_c
    if 0.0 < loss_pct < 1.0:
        ideal = power_output_mw / (1.0 - loss_pct)
        return loss_pct, ideal, ideal - power_output_mw
    return loss_pct, power_output_mw, 0.0


def inlet_cooling_gain(tiac_cooling_mw: float, fog_cooling_mw: float,
                       dry_bulb_c: float, online: bool,
                       threshold_c: float = 25.0) -> float:
    """Efficiency points recovered by chilling the turbine inlet air."""
    if not online or dry_bulb_c <= threshold_c:
        return 0.0
    return tiac_cooling_mw / 300.0 + fog_cooling_mw / 400.0


class ThermalPowerModel:
    """Plant-level power/efficiency with ISO deration accounting."""

    DEFAULT_PARAMS = {
        "unit_power": 510.0,          # MW per active turbine (34 x 15 MW blocks)
        "overload_factor": 1.1,
        "power_step": 5.0,            # MW per tick
        "efficiency_step": 0.05,      # points per tick
        "efficiency_min": 55.0,       # %
        "efficiency_max": 62.0,       # %
        "nominal_efficiency": 58.5,   # %
        "iso_reference_temp": 15.0,   # C
        "iso_loss_per_c": 0.007,
        "reseed_min": 0.85,           # fraction of plant capacity on start
        "reseed_max": 0.95,
        "power0": 2250.0,             # MW
    }

    def __init__(self, params: dict | None = None, rng: np.random.Generator | None = None):
        p = {**self.DEFAULT_PARAMS, **(params or {})}
        self.p = p
        self.rng = rng if rng is not None else np.random.default_rng()

        # State variables
        self.online = True
        self.power_output = p["power0"]        # MW
        self.efficiency = p["nominal_efficiency"]  # %
        self.efficiency_gain = 0.0            # % points
        self.loss_pct = 0.0
        self.ideal_power = self.power_output   # MW
        self.power_loss = 0.0                 # MW
        self.base_power = 0.0                 # MW

    def step(self, dt: float, active_turbines: int, dry_bulb_c: float) -> dict:
        """Advance output and efficiency by one tick.

        Args:
            dt: Time step in seconds (cadence only, the walk is per tick).
            active_turbines: Turbines currently in ``active`` status.
            dry_bulb_c: Ambient dry-bulb temperature.
        """
        if not self.online:
            return self.go_offline()

        p = self.p
        self.base_power = max(active_turbines, 0) * p["unit_power"]
        power = self.power_output + self.rng.uniform(-p["power_step"], p["power_step"])
        self.power_output = float(np.clip(power, 0.0, p["overload_factor"] * self.base_power))

        eff = self.efficiency + self.rng.uniform(-p["efficiency_step"], p["efficiency_step"])
        self.efficiency = float(np.clip(eff, p["efficiency_min"], p["efficiency_max"]))

        self.loss_pct, self.ideal_power, self.power_loss = iso_power_loss(
            self.power_output, dry_bulb_c, p["iso_reference_temp"], p["iso_loss_per_c"]
        )
        return self.get_state()

    def go_offline(self) -> dict:
        """Immediate shutdown; repeated calls leave the state unchanged."""
        self.online = False
        self.power_output = 0.0
        self.efficiency = 0.0
        self.efficiency_gain = 0.0
        self.loss_pct = 0.0
        self.ideal_power = 0.0
        self.power_loss = 0.0
        return self.get_state()

    def go_online(self, capacity_mw: float) -> dict:
        """Start-up: output reseeded to 85-95 % of the plant capacity."""
        p = self.p
        self.online = True
        self.power_output = capacity_mw * self.rng.uniform(p["reseed_min"], p["reseed_max"])
        self.efficiency = p["nominal_efficiency"]
        self.ideal_power = self.power_output
        return self.get_state()

    def set_efficiency_gain(self, gain: float):
        self.efficiency_gain = max(gain, 0.0) if self.online else 0.0

    @property
    def display_efficiency(self) -> float:
        if not self.online:
            return 0.0
        return float(np.clip(self.efficiency + self.efficiency_gain, 0.0, 100.0))

    def get_state(self) -> dict:
        return {
            "power_output": round(self.power_output, 1),
            "efficiency": round(self.efficiency, 2),
            "efficiency_gain": round(self.efficiency_gain, 3),
            "display_efficiency": round(self.display_efficiency, 2),
            "power_loss": round(self.power_loss, 2),
            "ideal_power": round(self.ideal_power, 1),
            "loss_pct": round(self.loss_pct * 100, 2),
            "base_power": round(self.base_power, 1),
        }
