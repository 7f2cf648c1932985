"""Data-center electrical and cooling loads.

The IT load walks inside a narrow band; facility overhead is a fixed
fraction plus a constant auxiliary load, which gives the PUE. The cooling
load walks separately and keeps a short trend.
"""

from collections import deque

import numpy as np


class DataCenterPowerModel:
    """IT load, facility total and PUE."""

    DEFAULT_PARAMS = {
        "it_load0": 485.0,          # kW
        "it_load_step": 5.0,
        "it_load_min": 450.0,
        "it_load_max": 500.0,
        "overhead_fraction": 0.05,
        "auxiliary_kw": 5.0,
    }

    def __init__(self, params: dict | None = None, rng: np.random.Generator | None = None):
        p = {**self.DEFAULT_PARAMS, **(params or {})}
        self.p = p
        self.rng = rng if rng is not None else np.random.default_rng()
        self.it_load = p["it_load0"]

    def step(self, dt: float = 2.5) -> dict:
        p = self.p
        load = self.it_load + self.rng.uniform(-p["it_load_step"], p["it_load_step"])
        self.it_load = float(np.clip(load, p["it_load_min"], p["it_load_max"]))
        return self.get_state()

    @property
    def total_load(self) -> float:
        return self.it_load * (1.0 + self.p["overhead_fraction"]) + self.p["auxiliary_kw"]

    @property
    def pue(self) -> float:
        return self.total_load / self.it_load

    def get_state(self) -> dict:
        return {
            "it_load_kw": round(self.it_load, 1),
            "total_load_kw": round(self.total_load, 1),
            "pue": round(self.pue, 3),
        }


class DataCenterCoolingModel:
    """Cooling load random walk with a short history."""

    DEFAULT_PARAMS = {
        "load0": 25.0,              # kW
        "load_step": 1.0,
        "load_min": 20.0,
        "load_max": 35.0,
        "history_window": 10,
    }

    def __init__(self, params: dict | None = None, rng: np.random.Generator | None = None):
        p = {**self.DEFAULT_PARAMS, **(params or {})}
        self.p = p
        self.rng = rng if rng is not None else np.random.default_rng()
        self.load = p["load0"]
        self.history: deque[dict] = deque(maxlen=p["history_window"])

    def step(self, dt: float = 3.0, sim_time: float = 0.0) -> dict:
        p = self.p
        load = self.load + self.rng.uniform(-p["load_step"], p["load_step"])
        self.load = float(np.clip(load, p["load_min"], p["load_max"]))
        self.history.append({"time": sim_time, "load_kw": round(self.load, 2)})
        return self.get_state()

    def get_state(self) -> dict:
        return {
            "cooling_load_kw": round(self.load, 2),
            "history": list(self.history),
        }
