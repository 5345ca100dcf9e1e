"""Water-quality metric definitions and their legal / healthy ranges.

Each of the five monitored metrics has a ``MetricConfig`` describing the
absolute bounds a sensor can report, the optimal band considered healthy,
the display unit, and the maximum random-walk step used by the simulator.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType


class Metric(StrEnum):
    """Monitored water-quality metrics, in canonical display order."""

    PH = "pH"
    TURBIDITY = "turbidity"
    SALINITY = "salinity"
    DISSOLVED_OXYGEN = "dissolvedOxygen"
    TEMPERATURE = "temperature"

    @property
    def position(self) -> int:
        """Position of the metric in per-metric arrays."""
        return METRIC_ORDER.index(self)


METRIC_ORDER: tuple[Metric, ...] = tuple(Metric)


@dataclass(frozen=True)
class OptimalRange:
    """Inclusive band of values considered healthy."""

    min: float
    max: float

    @property
    def width(self) -> float:
        return self.max - self.min


@dataclass(frozen=True)
class MetricConfig:
    """Static bounds for a single metric."""

    min: float
    max: float
    optimal: OptimalRange
    unit: str
    title: str = ""
    max_change: float = 0.1

    def __post_init__(self) -> None:
        if not (self.min <= self.optimal.min < self.optimal.max <= self.max):
            raise ValueError(
                f"Invalid bounds for {self.title or self.unit}: "
                f"min={self.min} optimal={self.optimal.min}..{self.optimal.max} max={self.max}"
            )
        if self.min + 1 > self.max - 1:
            raise ValueError(f"Range {self.min}..{self.max} leaves no room for clamping")
        if self.max_change <= 0:
            raise ValueError(f"max_change must be positive, got {self.max_change}")

    @property
    def clamp_min(self) -> float:
        """Lowest value the simulator may produce."""
        return self.min + 1

    @property
    def clamp_max(self) -> float:
        """Highest value the simulator may produce."""
        return self.max - 1


# ── Canonical metric table ─────────────────────────────────────────────
METRIC_CONFIGS: MappingProxyType[Metric, MetricConfig] = MappingProxyType(
    {
        Metric.PH: MetricConfig(
            min=0.0,
            max=14.0,
            optimal=OptimalRange(6.5, 8.5),
            unit="pH",
            title="pH Level",
            max_change=0.05,
        ),
        Metric.TURBIDITY: MetricConfig(
            min=0.0,
            max=100.0,
            optimal=OptimalRange(0.0, 5.0),
            unit="NTU",
            title="Turbidity",
            max_change=0.3,
        ),
        Metric.SALINITY: MetricConfig(
            min=0.0,
            max=50.0,
            optimal=OptimalRange(30.0, 35.0),
            unit="ppt",
            title="Salinity",
            max_change=0.2,
        ),
        Metric.DISSOLVED_OXYGEN: MetricConfig(
            min=0.0,
            max=20.0,
            optimal=OptimalRange(6.0, 12.0),
            unit="mg/L",
            title="Dissolved Oxygen",
            max_change=0.1,
        ),
        Metric.TEMPERATURE: MetricConfig(
            min=0.0,
            max=40.0,
            optimal=OptimalRange(20.0, 28.0),
            unit="°C",
            title="Temperature",
            max_change=0.3,
        ),
    }
)

# Baselines used when a generator is created without device overrides.
DEFAULT_BASELINES: MappingProxyType[Metric, float] = MappingProxyType(
    {
        Metric.PH: 7.2,
        Metric.TURBIDITY: 2.5,
        Metric.SALINITY: 32.8,
        Metric.DISSOLVED_OXYGEN: 8.5,
        Metric.TEMPERATURE: 24.2,
    }
)


def get_metric_config(metric: Metric | str) -> MetricConfig:
    """Look up the config for a metric by enum member or wire name."""
    return METRIC_CONFIGS[Metric(metric)]
