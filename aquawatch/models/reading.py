"""Immutable water-quality reading value object."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from aquawatch.models.metric import METRIC_ORDER, Metric


@dataclass(frozen=True, slots=True)
class WaterQualityReading:
    """One full metric vector from a single device at a point in time.

    Frozen and slotted -- a reading is produced atomically by a generator
    step and never patched afterwards.
    """

    ph: float
    turbidity: float
    salinity: float
    dissolved_oxygen: float
    temperature: float
    timestamp: int  # epoch milliseconds

    @classmethod
    def from_values(cls, values: Any, timestamp: int) -> WaterQualityReading:
        """Build a reading from a sequence ordered like ``METRIC_ORDER``."""
        ph, turbidity, salinity, dissolved_oxygen, temperature = (float(v) for v in values)
        return cls(
            ph=ph,
            turbidity=turbidity,
            salinity=salinity,
            dissolved_oxygen=dissolved_oxygen,
            temperature=temperature,
            timestamp=int(timestamp),
        )

    def value(self, metric: Metric | str) -> float:
        """Return the value recorded for *metric*."""
        return self.values()[Metric(metric).position]

    def values(self) -> tuple[float, float, float, float, float]:
        """All metric values in ``METRIC_ORDER``."""
        return (
            self.ph,
            self.turbidity,
            self.salinity,
            self.dissolved_oxygen,
            self.temperature,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize the reading to a plain dictionary keyed by metric name."""
        data: dict[str, Any] = {
            metric.value: value for metric, value in zip(METRIC_ORDER, self.values())
        }
        data["timestamp"] = self.timestamp
        return data

    def to_json(self) -> str:
        """Serialize the reading to a JSON string."""
        return json.dumps(self.to_dict(), ensure_ascii=False)
