"""Unit tests for the random-walk reading generator.

The ``aquawatch.patterns.random_walk`` module API:

    - ``ReadingGenerator(initial_baselines, rng)``
    - ``ReadingGenerator.step() -> WaterQualityReading``
    - ``ReadingGenerator.backfill(points, interval_ms) -> list[WaterQualityReading]``
    - ``ReadingGenerator.state -> GeneratorState``
"""

from __future__ import annotations

import numpy as np
import pytest

import aquawatch.patterns.random_walk as random_walk
from aquawatch.models.metric import DEFAULT_BASELINES, METRIC_CONFIGS, METRIC_ORDER, Metric
from aquawatch.patterns.random_walk import TREND_LIMIT, GeneratorState, ReadingGenerator


# =========================================================================
# Construction tests
# =========================================================================


class TestConstruction:
    """Tests for generator initial state."""

    def test_default_baselines(self, generator: ReadingGenerator) -> None:
        state = generator.state
        for metric in METRIC_ORDER:
            assert state.baseline_for(metric) == DEFAULT_BASELINES[metric]

    def test_initial_baselines_override(self, rng: np.random.Generator) -> None:
        """Verify explicit baselines replace defaults and unspecified metrics keep theirs."""
        gen = ReadingGenerator(initial_baselines={Metric.PH: 6.9, "salinity": 34.0}, rng=rng)
        state = gen.state
        assert state.baseline_for(Metric.PH) == 6.9
        assert state.baseline_for(Metric.SALINITY) == 34.0
        assert state.baseline_for(Metric.TEMPERATURE) == DEFAULT_BASELINES[Metric.TEMPERATURE]

    def test_initial_trend_is_small(self, generator: ReadingGenerator) -> None:
        for metric in METRIC_ORDER:
            assert abs(generator.state.trend_for(metric)) <= TREND_LIMIT

    def test_trends_independent_per_generator(self) -> None:
        a = ReadingGenerator(rng=np.random.default_rng(1))
        b = ReadingGenerator(rng=np.random.default_rng(2))
        assert a.state.trend != b.state.trend

    def test_state_is_a_copy(self, generator: ReadingGenerator) -> None:
        state = generator.state
        assert isinstance(state, GeneratorState)
        generator.step()
        assert generator.state.baseline != state.baseline


# =========================================================================
# step() tests
# =========================================================================


class TestStep:
    """Tests for the single random-walk step."""

    def test_clamp_invariant(self, generator: ReadingGenerator) -> None:
        """Verify every value stays within [min + 1, max - 1] across many steps."""
        for _ in range(2000):
            reading = generator.step()
            for metric in METRIC_ORDER:
                config = METRIC_CONFIGS[metric]
                assert config.min + 1 <= reading.value(metric) <= config.max - 1

    def test_clamp_at_upper_edge(self, rng: np.random.Generator) -> None:
        """Verify a baseline pushed past the clamp is pulled back inside."""
        gen = ReadingGenerator(initial_baselines={Metric.PH: 14.0, Metric.TURBIDITY: 0.0}, rng=rng)
        reading = gen.step()
        assert reading.ph <= 13.0
        assert reading.turbidity >= 1.0

    def test_step_persists_baseline(self, generator: ReadingGenerator) -> None:
        """Verify the walk is cumulative: the new reading becomes the baseline."""
        reading = generator.step()
        assert generator.state.baseline == reading.values()

    def test_successive_readings_differ(self, generator: ReadingGenerator) -> None:
        first = generator.step()
        second = generator.step()
        assert first.values() != second.values()

    def test_bounded_step_size(self, generator: ReadingGenerator) -> None:
        """Verify no metric moves more than max_change / 2 plus the trend limit."""
        previous = generator.step()
        for _ in range(1000):
            current = generator.step()
            for metric in METRIC_ORDER:
                limit = METRIC_CONFIGS[metric].max_change / 2 + TREND_LIMIT
                delta = abs(current.value(metric) - previous.value(metric))
                assert delta <= limit + 1e-12, f"{metric} jumped {delta:.4f} > {limit:.4f}"
            previous = current

    def test_trend_stays_bounded(self, generator: ReadingGenerator) -> None:
        for _ in range(500):
            generator.step()
            for metric in METRIC_ORDER:
                assert abs(generator.state.trend_for(metric)) <= TREND_LIMIT

    def test_trend_occasionally_resampled(self, generator: ReadingGenerator) -> None:
        """With 5% per-metric probability, 500 steps should change the drift."""
        initial = generator.state.trend
        for _ in range(500):
            generator.step()
        assert generator.state.trend != initial

    def test_step_reproducible(self) -> None:
        """Verify the same seed produces the same value sequence."""
        a = ReadingGenerator(rng=np.random.default_rng(seed=7))
        b = ReadingGenerator(rng=np.random.default_rng(seed=7))
        values_a = [a.step().values() for _ in range(50)]
        values_b = [b.step().values() for _ in range(50)]
        assert values_a == values_b

    def test_step_timestamp_is_now(
        self, generator: ReadingGenerator, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(random_walk, "_now_ms", lambda: 1700000000000)
        assert generator.step().timestamp == 1700000000000


# =========================================================================
# backfill() tests
# =========================================================================


class TestBackfill:
    """Tests for history backfill."""

    def test_backfill_length(self, generator: ReadingGenerator) -> None:
        assert len(generator.backfill(20, 60_000)) == 20

    def test_backfill_timestamps_evenly_spaced(
        self, generator: ReadingGenerator, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Verify timestamps are interval apart and end at the call time."""
        now_ms = 1700000000000
        monkeypatch.setattr(random_walk, "_now_ms", lambda: now_ms)

        history = generator.backfill(5, 60_000)
        timestamps = [r.timestamp for r in history]
        assert timestamps == [now_ms - (4 - i) * 60_000 for i in range(5)]

    def test_backfill_ends_near_call_time(self, generator: ReadingGenerator) -> None:
        before = random_walk._now_ms()
        history = generator.backfill(10, 1000)
        after = random_walk._now_ms()
        assert before <= history[-1].timestamp <= after
        assert all(b.timestamp - a.timestamp == 1000 for a, b in zip(history, history[1:]))

    def test_backfill_advances_state(self, generator: ReadingGenerator) -> None:
        """Verify backfill walks forward: the last point is the new baseline."""
        history = generator.backfill(3)
        assert generator.state.baseline == history[-1].values()

    def test_backfill_not_idempotent(self, generator: ReadingGenerator) -> None:
        first = [r.values() for r in generator.backfill(5)]
        second = [r.values() for r in generator.backfill(5)]
        assert first != second

    def test_backfill_respects_clamp(self, generator: ReadingGenerator) -> None:
        for reading in generator.backfill(200, 1):
            for metric in METRIC_ORDER:
                config = METRIC_CONFIGS[metric]
                assert config.clamp_min <= reading.value(metric) <= config.clamp_max

    def test_backfill_zero_points(self, generator: ReadingGenerator) -> None:
        assert generator.backfill(0) == []

    def test_backfill_rejects_negative_points(self, generator: ReadingGenerator) -> None:
        with pytest.raises(ValueError):
            generator.backfill(-1)

    def test_backfill_rejects_non_positive_interval(self, generator: ReadingGenerator) -> None:
        with pytest.raises(ValueError):
            generator.backfill(5, 0)
