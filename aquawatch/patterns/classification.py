"""Status and trend classification for water-quality values.

Pure functions mapping a metric value (or a pair of consecutive values) to
the labels the dashboard renders:

- ``classify_status``: NORMAL inside the optimal band, WARNING inside the
  band widened by 20% of its width on each side, CRITICAL beyond.
- ``classify_trend``: STABLE when the change is below 0.01, else UP / DOWN.
- ``aggregate_status``: worst-of rollup of the per-metric statuses.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum

from aquawatch.models.metric import METRIC_CONFIGS, METRIC_ORDER, Metric, MetricConfig
from aquawatch.models.reading import WaterQualityReading

WARNING_BAND_FRACTION = 0.2
STABLE_THRESHOLD = 0.01


class MetricStatus(StrEnum):
    """Health of a single metric value."""

    NORMAL = "normal"
    WARNING = "warning"
    CRITICAL = "critical"


class TrendDirection(StrEnum):
    """Direction of change between two consecutive values."""

    UP = "up"
    DOWN = "down"
    STABLE = "stable"


class OverallStatus(StrEnum):
    """Rollup of the five metric statuses of a reading."""

    EXCELLENT = "excellent"
    GOOD = "good"
    WARNING = "warning"
    CRITICAL = "critical"

    @property
    def description(self) -> str:
        return _OVERALL_DESCRIPTIONS[self]


_OVERALL_DESCRIPTIONS: dict[OverallStatus, str] = {
    OverallStatus.EXCELLENT: "All parameters within optimal range",
    OverallStatus.GOOD: "Parameters within acceptable range",
    OverallStatus.WARNING: "Some parameters need attention",
    OverallStatus.CRITICAL: "Immediate action required",
}


def classify_status(value: float, config: MetricConfig) -> MetricStatus:
    """Classify *value* against the optimal band of *config*."""
    optimal = config.optimal
    if optimal.min <= value <= optimal.max:
        return MetricStatus.NORMAL

    margin = optimal.width * WARNING_BAND_FRACTION
    if optimal.min - margin <= value <= optimal.max + margin:
        return MetricStatus.WARNING

    return MetricStatus.CRITICAL


def classify_trend(current: float, previous: float) -> TrendDirection:
    """Compare two consecutive values of the same metric."""
    if abs(current - previous) < STABLE_THRESHOLD:
        return TrendDirection.STABLE
    return TrendDirection.UP if current > previous else TrendDirection.DOWN


def aggregate_status(statuses: Iterable[MetricStatus]) -> OverallStatus:
    """Roll per-metric statuses up into one overall label.

    Any CRITICAL wins, then any WARNING; all NORMAL is EXCELLENT.  GOOD is
    only reachable for an empty input.
    """
    statuses = list(statuses)
    if MetricStatus.CRITICAL in statuses:
        return OverallStatus.CRITICAL
    if MetricStatus.WARNING in statuses:
        return OverallStatus.WARNING
    if statuses and all(s == MetricStatus.NORMAL for s in statuses):
        return OverallStatus.EXCELLENT
    return OverallStatus.GOOD


def classify_reading(reading: WaterQualityReading) -> dict[Metric, MetricStatus]:
    """Classify every metric of *reading* against the canonical configs."""
    return {
        metric: classify_status(reading.value(metric), METRIC_CONFIGS[metric])
        for metric in METRIC_ORDER
    }


def classify_trends(
    current: WaterQualityReading,
    previous: WaterQualityReading,
) -> dict[Metric, TrendDirection]:
    """Per-metric trend between two consecutive readings."""
    return {
        metric: classify_trend(current.value(metric), previous.value(metric))
        for metric in METRIC_ORDER
    }


def overall_status(reading: WaterQualityReading) -> OverallStatus:
    return aggregate_status(classify_reading(reading).values())
