"""Stateful random-walk generator for simulated water-quality readings.

Each device owns one ``ReadingGenerator``.  The generator keeps a baseline
value and a slow drift ("trend") per metric and advances both on every
``step()``: the baseline moves by the drift plus a bounded uniform jitter,
the drift is occasionally resampled to model reversals, and the result is
clamped one unit inside the metric's absolute bounds.  Uses numpy so that
all five metrics advance in one vectorised update and tests can inject a
seeded ``Generator``.
"""

from __future__ import annotations

import dataclasses
import time
from collections.abc import Mapping
from dataclasses import dataclass

import numpy as np

from aquawatch.models.metric import DEFAULT_BASELINES, METRIC_CONFIGS, METRIC_ORDER, Metric
from aquawatch.models.reading import WaterQualityReading

TREND_LIMIT = 0.01
TREND_CHANGE_PROBABILITY = 0.05
DEFAULT_HISTORY_INTERVAL_MS = 60_000

# Per-metric arrays, ordered like METRIC_ORDER.
_MAX_CHANGE = np.array([METRIC_CONFIGS[m].max_change for m in METRIC_ORDER])
_LOWER = np.array([METRIC_CONFIGS[m].clamp_min for m in METRIC_ORDER])
_UPPER = np.array([METRIC_CONFIGS[m].clamp_max for m in METRIC_ORDER])


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class GeneratorState:
    """Read-only view of a generator's baseline and drift per metric."""

    baseline: tuple[float, ...]
    trend: tuple[float, ...]

    def baseline_for(self, metric: Metric) -> float:
        return self.baseline[metric.position]

    def trend_for(self, metric: Metric) -> float:
        return self.trend[metric.position]


class ReadingGenerator:
    """Produces a temporally coherent, bounded sequence of readings."""

    def __init__(
        self,
        initial_baselines: Mapping[Metric, float] | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self._rng = np.random.default_rng() if rng is None else rng

        baselines = dict(DEFAULT_BASELINES)
        if initial_baselines:
            baselines.update({Metric(k): float(v) for k, v in initial_baselines.items()})
        self._baseline = np.array([baselines[m] for m in METRIC_ORDER], dtype=float)
        self._trend = self._rng.uniform(-TREND_LIMIT, TREND_LIMIT, size=len(METRIC_ORDER))

    @property
    def state(self) -> GeneratorState:
        return GeneratorState(
            baseline=tuple(float(v) for v in self._baseline),
            trend=tuple(float(v) for v in self._trend),
        )

    def step(self) -> WaterQualityReading:
        """Advance every metric by one random-walk step and return the reading."""
        random_change = self._rng.uniform(-_MAX_CHANGE / 2, _MAX_CHANGE / 2)
        value = self._baseline + self._trend + random_change

        # Occasionally reverse / re-pick the drift of individual metrics
        resample = self._rng.random(len(METRIC_ORDER)) < TREND_CHANGE_PROBABILITY
        if resample.any():
            self._trend[resample] = self._rng.uniform(
                -TREND_LIMIT, TREND_LIMIT, size=int(resample.sum())
            )

        self._baseline = np.clip(value, _LOWER, _UPPER)
        return WaterQualityReading.from_values(self._baseline, timestamp=_now_ms())

    def backfill(
        self,
        points: int,
        interval_ms: int = DEFAULT_HISTORY_INTERVAL_MS,
    ) -> list[WaterQualityReading]:
        """Generate *points* readings ending at the current time.

        Values are produced forward through ``step()``, so each call
        advances the walk; timestamps are then reassigned to be evenly
        spaced *interval_ms* apart with the last one at "now".
        """
        if points < 0:
            raise ValueError(f"points must be non-negative, got {points}")
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")

        now_ms = _now_ms()
        history: list[WaterQualityReading] = []
        for i in range(points):
            reading = self.step()
            history.append(
                dataclasses.replace(reading, timestamp=now_ms - (points - 1 - i) * interval_ms)
            )
        return history
