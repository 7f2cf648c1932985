"""Turbine fleet model.

Telemetry (rpm, temperature, pressure) is derived every tick from the
operator-assigned status of each turbine. Maintenance scores are operator
values and are never derived from telemetry.

Typical fleet: four heavy-duty gas turbines in combined cycle plus one
Rankine-cycle steam turbine on the heat recovery steam generator.
"""

from collections import deque
from dataclasses import dataclass, field

import numpy as np

from plant_sim.types import TurbineStatus, TurbineType

MAINTENANCE_THRESHOLD = 75.0
MAINTENANCE_RESET_SCORE = 5.0


@dataclass
class Turbine:
    id: int
    type: TurbineType
    manufacturer: str
    model: str
    iso_capacity_mw: float
    status: TurbineStatus = TurbineStatus.INACTIVE
    rpm: float = 0.0
    temp: float = 25.0          # C
    pressure: float = 1.0       # bar
    maintenance_score: float = 0.0
    history: deque = field(default_factory=lambda: deque(maxlen=30))

    @property
    def needs_maintenance(self) -> bool:
        return self.maintenance_score > MAINTENANCE_THRESHOLD

    @property
    def is_faulted(self) -> bool:
        return self.status == TurbineStatus.ERROR

    def set_maintenance_score(self, score: float):
        self.maintenance_score = float(np.clip(score, 0.0, 100.0))

    def perform_maintenance(self):
        """Operator maintenance action: score drops back to a low value."""
        self.maintenance_score = MAINTENANCE_RESET_SCORE

    def get_state(self) -> dict:
        return {
            "id": self.id,
            "status": self.status.value,
            "rpm": round(self.rpm, 0),
            "temp": round(self.temp, 1),
            "pressure": round(self.pressure, 2),
            "type": self.type.value,
            "manufacturer": self.manufacturer,
            "model": self.model,
            "iso_capacity_mw": self.iso_capacity_mw,
            "maintenance_score": round(self.maintenance_score, 1),
            "needs_maintenance": self.needs_maintenance,
            "faulted": self.is_faulted,
        }


# id -> (type, manufacturer, model, ISO capacity MW, initial maintenance score)
DEFAULT_FLEET = {
    1: (TurbineType.COMBINED_CYCLE, "Siemens Energy", "SGT5-4000F", 510.0, 22.0),
    2: (TurbineType.COMBINED_CYCLE, "Siemens Energy", "SGT5-4000F", 510.0, 41.0),
    3: (TurbineType.COMBINED_CYCLE, "GE Vernova", "9F.03", 510.0, 78.0),
    4: (TurbineType.COMBINED_CYCLE, "GE Vernova", "9F.03", 510.0, 12.0),
    5: (TurbineType.RANKINE_CYCLE, "Mitsubishi Power", "SRT-50", 510.0, 56.0),
}


def build_default_fleet(history_window: int = 30) -> list[Turbine]:
    return [
        Turbine(
            id=tid,
            type=ttype,
            manufacturer=maker,
            model=model,
            iso_capacity_mw=capacity,
            maintenance_score=score,
            history=deque(maxlen=history_window),
        )
        for tid, (ttype, maker, model, capacity, score) in DEFAULT_FLEET.items()
    ]


class TurbineFleetModel:
    """Per-turbine telemetry driven by the configured status map."""

    DEFAULT_PARAMS = {
        "nominal_rpm": 3600.0,
        "rpm_jitter": 25.0,
        "nominal_temp": 850.0,       # C turbine inlet
        "temp_jitter": 50.0,
        "nominal_pressure": 15.0,    # bar
        "pressure_jitter": 1.0,
        "idle_temp": 25.0,
        "idle_pressure": 1.0,
        "history_window": 30,
    }

    def __init__(self, turbines: list[Turbine] | None = None, params: dict | None = None,
                 rng: np.random.Generator | None = None):
        p = {**self.DEFAULT_PARAMS, **(params or {})}
        self.p = p
        self.rng = rng if rng is not None else np.random.default_rng()
        fleet = turbines if turbines is not None else build_default_fleet(p["history_window"])
        self.turbines: dict[int, Turbine] = {t.id: t for t in fleet}

    def step(self, dt: float, status_map: dict[int, TurbineStatus],
             sim_time: float = 0.0,
             running: bool = True) -> list[tuple[int, TurbineStatus, TurbineStatus]]:
        """Apply configured statuses and refresh telemetry.

        With ``running`` false (plant down) statuses are still applied but
        every turbine idles and nothing is added to the history.

        Returns the status transitions ``(turbine_id, old, new)`` seen this tick.
        """
        transitions = []
        for tid, turbine in self.turbines.items():
            configured = TurbineStatus(status_map.get(tid, TurbineStatus.INACTIVE))
            if configured != turbine.status:
                transitions.append((tid, turbine.status, configured))
                turbine.status = configured

            if not running:
                self._idle(turbine)
                continue
            if configured == TurbineStatus.ACTIVE:
                self._perturb(turbine)
            else:
                self._idle(turbine)

            turbine.history.append({
                "time": sim_time,
                "rpm": turbine.rpm,
                "temp": turbine.temp,
                "pressure": turbine.pressure,
            })
        return transitions

    def _perturb(self, turbine: Turbine):
        p = self.p
        turbine.rpm = p["nominal_rpm"] + self.rng.uniform(-p["rpm_jitter"], p["rpm_jitter"])
        turbine.temp = p["nominal_temp"] + self.rng.uniform(-p["temp_jitter"], p["temp_jitter"])
        turbine.pressure = p["nominal_pressure"] + self.rng.uniform(
            -p["pressure_jitter"], p["pressure_jitter"]
        )

    def _idle(self, turbine: Turbine):
        turbine.rpm = 0.0
        turbine.temp = self.p["idle_temp"]
        turbine.pressure = self.p["idle_pressure"]

    def shutdown(self):
        """Zero telemetry on every turbine (plant offline); statuses are kept."""
        for turbine in self.turbines.values():
            self._idle(turbine)

    def get(self, turbine_id: int) -> Turbine:
        try:
            return self.turbines[turbine_id]
        except KeyError:
            raise KeyError(f"Unknown turbine {turbine_id}") from None

    @property
    def active_count(self) -> int:
        return sum(1 for t in self.turbines.values() if t.status == TurbineStatus.ACTIVE)

    def power_shares(self, total_power_mw: float) -> dict[int, float]:
        """Split plant output evenly across active turbines."""
        active = self.active_count
        per_turbine = total_power_mw / active if active > 0 else 0.0
        return {
            tid: (per_turbine if t.status == TurbineStatus.ACTIVE else 0.0)
            for tid, t in self.turbines.items()
        }

    def get_state(self) -> list[dict]:
        return [t.get_state() for t in self.turbines.values()]
