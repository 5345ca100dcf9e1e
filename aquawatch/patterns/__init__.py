"""Reading generation and classification for simulated telemetry."""

from aquawatch.patterns.classification import (
    MetricStatus,
    OverallStatus,
    TrendDirection,
    aggregate_status,
    classify_reading,
    classify_status,
    classify_trend,
    classify_trends,
    overall_status,
)
from aquawatch.patterns.random_walk import GeneratorState, ReadingGenerator

__all__ = [
    "GeneratorState",
    "MetricStatus",
    "OverallStatus",
    "ReadingGenerator",
    "TrendDirection",
    "aggregate_status",
    "classify_reading",
    "classify_status",
    "classify_trend",
    "classify_trends",
    "overall_status",
]
