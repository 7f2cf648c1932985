"""
Operator alert log and threshold monitors.

Alerts are raised on threshold crossings and turbine status transitions.
They do not expire on their own; only dismiss/clear removes them.
"""

import itertools
from dataclasses import dataclass
from datetime import datetime, timezone

from plant_sim.types import AlertLevel


@dataclass(frozen=True)
class Alert:
    id: int
    level: AlertLevel
    message: str
    timestamp: str

    def get_state(self) -> dict:
        return {
            "id": self.id,
            "level": self.level.value,
            "message": self.message,
            "timestamp": self.timestamp,
        }


class AlertLog:
    """Newest-first alert list, deduplicated by message and capped."""

    def __init__(self, max_alerts: int = 5):
        self.max_alerts = max_alerts
        self._alerts: list[Alert] = []
        self._ids = itertools.count(1)

    def add(self, level: AlertLevel, message: str) -> Alert | None:
        """Append an alert unless one with the same message is already listed."""
        if any(a.message == message for a in self._alerts):
            return None
        alert = Alert(
            id=next(self._ids),
            level=AlertLevel(level),
            message=message,
            timestamp=datetime.now(timezone.utc).isoformat(),
        )
        self._alerts = [alert, *self._alerts][: self.max_alerts]
        return alert

    def dismiss(self, alert_id: int) -> bool:
        before = len(self._alerts)
        self._alerts = [a for a in self._alerts if a.id != alert_id]
        return len(self._alerts) < before

    def clear(self):
        self._alerts = []

    @property
    def alerts(self) -> tuple[Alert, ...]:
        return tuple(self._alerts)

    def __len__(self) -> int:
        return len(self._alerts)


class ThresholdMonitor:
    """
    Edge-triggered limit check.

    Fires once when the watched condition becomes true and re-arms only
    after it clears again.
    """

    def __init__(self, name: str, level: AlertLevel = AlertLevel.WARNING):
        self.name = name
        self.level = level
        self._active: set = set()

    def check(self, violating: set) -> set:
        """Return the keys that newly entered violation this call."""
        violating = set(violating)
        fired = violating - self._active
        self._active = violating
        return fired

    def reset(self):
        self._active = set()
