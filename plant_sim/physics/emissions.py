"""Stack emissions model.

Each pollutant walks randomly inside a fixed band. The forecast is a pure
geometric extrapolation of one sample and is not re-anchored to later
readings.
"""

from collections import deque

import numpy as np

POLLUTANTS = ("nox", "sox", "co", "particulates")

# pollutant -> (min, max, step) in kg/h
EMISSION_BANDS = {
    "nox": (10.0, 25.0, 0.5),
    "sox": (2.0, 8.0, 0.25),
    "co": (20.0, 45.0, 1.0),
    "particulates": (4.0, 12.0, 0.5),
}

# Daily growth factors used by the 7-day outlook
FORECAST_GROWTH = {
    "nox": 1.05,
    "sox": 1.05,
    "co": 1.02,
    "particulates": 1.02,
}


def emissions_forecast(sample: dict, days: int = 7) -> list[dict]:
    """Compound ``sample`` forward one day at a time."""
    current = {k: sample[k] for k in POLLUTANTS}
    forecast = []
    for day in range(1, days + 1):
        current = {k: v * FORECAST_GROWTH[k] for k, v in current.items()}
        forecast.append({"time": f"D+{day}", **current})
    return forecast


class EmissionsModel:
    """Bounded random walk of NOx, SOx, CO and particulates."""

    DEFAULT_PARAMS = {
        "initial": {"nox": 10.5, "sox": 4.2, "co": 30.1, "particulates": 7.8},
        "history_window": 48,
        "alarm_fraction": 0.85,   # of the band maximum
    }

    def __init__(self, params: dict | None = None, rng: np.random.Generator | None = None):
        p = {**self.DEFAULT_PARAMS, **(params or {})}
        self.rng = rng if rng is not None else np.random.default_rng()
        self.alarm_fraction = p["alarm_fraction"]
        self.online = True
        self.sample = dict(p["initial"])
        self.history: deque[dict] = deque(maxlen=p["history_window"])

    def step(self, dt: float, sim_time: float = 0.0) -> dict:
        if self.online:
            for name, (low, high, step) in EMISSION_BANDS.items():
                value = self.sample[name] + self.rng.uniform(-step, step)
                self.sample[name] = float(np.clip(value, low, high))
        self.history.append({"time": sim_time, **self.readings})
        return self.get_state()

    @property
    def readings(self) -> dict:
        """Reported emissions: zero while the plant is down."""
        if not self.online:
            return {k: 0.0 for k in POLLUTANTS}
        return dict(self.sample)

    def forecast(self, days: int = 7) -> list[dict]:
        """Outlook anchored on the latest recorded sample; all zero while offline."""
        if not self.online or not self.history:
            return emissions_forecast(self.readings, days)
        latest = self.history[-1]
        return emissions_forecast(latest, days)

    def over_limit(self) -> list[str]:
        """Pollutants reading above the alarm fraction of their band maximum."""
        readings = self.readings
        return [
            name for name, (_, high, _) in EMISSION_BANDS.items()
            if readings[name] > self.alarm_fraction * high
        ]

    def get_state(self) -> dict:
        return {k: round(v, 2) for k, v in self.readings.items()}
