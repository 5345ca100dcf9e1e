"""Display-layer state for a single-device water-quality dashboard.

Holds the selected device, the current and previous readings and a rolling
history window, and turns them into per-metric snapshots (value, status,
trend) ready for rendering.  Driven by device selection and timer ticks.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from aquawatch.generators.registry import DEFAULT_HISTORY_POINTS, DeviceRegistry
from aquawatch.models.device import Device
from aquawatch.models.metric import METRIC_CONFIGS, METRIC_ORDER, Metric
from aquawatch.models.reading import WaterQualityReading
from aquawatch.patterns.classification import (
    MetricStatus,
    OverallStatus,
    TrendDirection,
    aggregate_status,
    classify_status,
    classify_trend,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MetricSnapshot:
    """One metric card: current value with its status and trend."""

    metric: Metric
    title: str
    value: float
    unit: str
    status: MetricStatus
    trend: TrendDirection


@dataclass(frozen=True)
class DashboardSnapshot:
    """Everything the renderer needs for one frame."""

    device: Device | None
    device_id: str
    overall: OverallStatus
    metrics: tuple[MetricSnapshot, ...]
    history: tuple[WaterQualityReading, ...]
    devices: tuple[Device, ...]
    last_update: int  # epoch milliseconds


class Dashboard:
    """Tracks the selected device and its recent readings."""

    def __init__(
        self,
        registry: DeviceRegistry,
        device_id: str,
        history_points: int = DEFAULT_HISTORY_POINTS,
    ) -> None:
        self._registry = registry
        self._history_points = history_points
        self._devices: list[Device] = registry.list_devices()

        self._device_id = device_id
        self._current = registry.get_reading(device_id)
        self._previous = registry.get_reading(device_id)
        self._history = registry.get_history(device_id, history_points)
        self._last_update = int(time.time() * 1000)

    @property
    def device_id(self) -> str:
        return self._device_id

    @property
    def current(self) -> WaterQualityReading:
        return self._current

    @property
    def previous(self) -> WaterQualityReading:
        return self._previous

    @property
    def history(self) -> list[WaterQualityReading]:
        return list(self._history)

    @property
    def devices(self) -> list[Device]:
        return list(self._devices)

    def select(self, device_id: str) -> None:
        """Switch to another device and reload its history.

        Raises ``UnknownDeviceError`` without touching the current state.
        """
        reading = self._registry.get_reading(device_id)
        history = self._registry.get_history(device_id, self._history_points)

        logger.info("Selected device %s", device_id)
        self._device_id = device_id
        self._previous = self._current
        self._current = reading
        self._history = history
        self._last_update = int(time.time() * 1000)

    def tick(self) -> WaterQualityReading:
        """Timer refresh: fetch a new reading and slide the history window."""
        reading = self._registry.get_reading(self._device_id)
        self._previous = self._current
        self._current = reading
        self._history = [*self._history[1:], reading] if self._history else [reading]
        self._devices = self._registry.list_devices()
        self._last_update = int(time.time() * 1000)
        return reading

    def snapshot(self) -> DashboardSnapshot:
        metrics = []
        for metric in METRIC_ORDER:
            config = METRIC_CONFIGS[metric]
            value = self._current.value(metric)
            metrics.append(
                MetricSnapshot(
                    metric=metric,
                    title=config.title,
                    value=value,
                    unit=config.unit,
                    status=classify_status(value, config),
                    trend=classify_trend(value, self._previous.value(metric)),
                )
            )

        device = next((d for d in self._devices if d.device_id == self._device_id), None)
        return DashboardSnapshot(
            device=device,
            device_id=self._device_id,
            overall=aggregate_status(m.status for m in metrics),
            metrics=tuple(metrics),
            history=tuple(self._history),
            devices=tuple(self._devices),
            last_update=self._last_update,
        )
