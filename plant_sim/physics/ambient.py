"""Ambient conditions model.

Bounded random walk of the site weather seen by the gas turbine inlets.
Only the dry-bulb temperature feeds back into the plant (ISO deration and
the inlet-cooling efficiency gain); wet bulb and humidity are reported.
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class AmbientState:
    dry_bulb_c: float
    wet_bulb_c: float
    humidity_pct: float


class AmbientConditionsModel:
    """Random-walk weather generator with physical clamps."""

    DEFAULT_PARAMS = {
        "dry_bulb_step": 0.25,     # C per tick
        "wet_bulb_step": 0.2,      # C per tick
        "humidity_step": 1.0,      # %RH per tick
        "dry_bulb_min": 10.0,
        "dry_bulb_max": 45.0,
        "wet_bulb_min": 8.0,
        "wet_bulb_depression": 1.0,  # wet bulb stays at least this far below dry bulb
        "humidity_min": 20.0,
        "humidity_max": 99.0,
        "dry_bulb0": 32.4,
        "wet_bulb0": 26.0,
        "humidity0": 65.0,
    }

    def __init__(self, params: dict | None = None, rng: np.random.Generator | None = None):
        p = {**self.DEFAULT_PARAMS, **(params or {})}
        self.p = p
        self.rng = rng if rng is not None else np.random.default_rng()
        self.state = AmbientState(
            dry_bulb_c=p["dry_bulb0"],
            wet_bulb_c=p["wet_bulb0"],
            humidity_pct=p["humidity0"],
        )

    def tick(self, prev: AmbientState) -> AmbientState:
        """Return the next ambient state; does not touch ``self.state``."""
        p = self.p
        dry = prev.dry_bulb_c + self.rng.uniform(-p["dry_bulb_step"], p["dry_bulb_step"])
        dry = float(np.clip(dry, p["dry_bulb_min"], p["dry_bulb_max"]))

        wet = prev.wet_bulb_c + self.rng.uniform(-p["wet_bulb_step"], p["wet_bulb_step"])
        wet = float(np.clip(wet, p["wet_bulb_min"], dry - p["wet_bulb_depression"]))

        rh = prev.humidity_pct + self.rng.uniform(-p["humidity_step"], p["humidity_step"])
        rh = float(np.clip(rh, p["humidity_min"], p["humidity_max"]))

        return AmbientState(dry_bulb_c=dry, wet_bulb_c=wet, humidity_pct=rh)

    def step(self, dt: float = 2.0) -> dict:
        """Advance the committed ambient state by one tick."""
        self.state = self.tick(self.state)
        return self.get_state()

    def get_state(self) -> dict:
        return {
            "dry_bulb_c": round(self.state.dry_bulb_c, 2),
            "wet_bulb_c": round(self.state.wet_bulb_c, 2),
            "humidity_pct": round(self.state.humidity_pct, 1),
        }
