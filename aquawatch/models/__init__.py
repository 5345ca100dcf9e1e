"""Domain models for the water-quality telemetry engine."""

from aquawatch.models.device import DEVICE_PROFILES, Device, DeviceProfile, DeviceStatus
from aquawatch.models.metric import (
    DEFAULT_BASELINES,
    METRIC_CONFIGS,
    METRIC_ORDER,
    Metric,
    MetricConfig,
    OptimalRange,
    get_metric_config,
)
from aquawatch.models.reading import WaterQualityReading

__all__ = [
    "DEFAULT_BASELINES",
    "DEVICE_PROFILES",
    "Device",
    "DeviceProfile",
    "DeviceStatus",
    "METRIC_CONFIGS",
    "METRIC_ORDER",
    "Metric",
    "MetricConfig",
    "OptimalRange",
    "WaterQualityReading",
    "get_metric_config",
]
