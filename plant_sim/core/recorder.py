"""Rolling in-memory history of plant trend values.

Only the last ``window`` records are kept; nothing is written to disk.
"""

from collections import deque
from datetime import datetime, timezone


class HistoryRecorder:
    """Bounded buffer of flattened plant states for trend charts."""

    def __init__(self, window: int = 60):
        self.window = window
        self._buffer: deque[dict] = deque(maxlen=window)
        self._total_records = 0

    def record(self, simulation_time: float, state: dict) -> dict:
        """Record a state sample and return the stored row."""
        record = {
            "simulation_time": simulation_time,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            **self._flatten(state),
        }
        self._buffer.append(record)
        self._total_records += 1
        return record

    def records(self, last: int | None = None) -> list[dict]:
        rows = list(self._buffer)
        if last is not None:
            rows = rows[-last:] if last > 0 else []
        return rows

    @staticmethod
    def _flatten(d: dict, prefix: str = "") -> dict:
        """Flatten nested dict with dot-separated keys."""
        items = {}
        for k, v in d.items():
            key = f"{prefix}{k}" if not prefix else f"{prefix}.{k}"
            if isinstance(v, dict):
                items.update(HistoryRecorder._flatten(v, key))
            else:
                items[key] = v
        return items

    @property
    def total_records(self) -> int:
        return self._total_records

    def __len__(self) -> int:
        return len(self._buffer)
