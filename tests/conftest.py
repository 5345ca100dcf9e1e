"""Shared fixtures for the aquawatch test suite.

Provides seeded random generators, registries, readings and metric configs
that are reused across the unit tests.
"""

from __future__ import annotations

import numpy as np
import pytest

from aquawatch.generators.registry import DeviceRegistry
from aquawatch.models.metric import METRIC_CONFIGS, Metric, MetricConfig
from aquawatch.models.reading import WaterQualityReading
from aquawatch.patterns.random_walk import ReadingGenerator


# ---------------------------------------------------------------------------
# Randomness fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def rng() -> np.random.Generator:
    """Return a deterministic numpy generator."""
    return np.random.default_rng(seed=42)


# ---------------------------------------------------------------------------
# Engine fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def generator(rng: np.random.Generator) -> ReadingGenerator:
    """Return a reading generator with default baselines."""
    return ReadingGenerator(rng=rng)


@pytest.fixture()
def registry(rng: np.random.Generator) -> DeviceRegistry:
    """Return a registry over the canonical three-station fleet."""
    return DeviceRegistry(rng=rng)


# ---------------------------------------------------------------------------
# Reading / config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def ph_config() -> MetricConfig:
    return METRIC_CONFIGS[Metric.PH]


@pytest.fixture()
def sample_reading() -> WaterQualityReading:
    """Return a reading with every metric inside its optimal band."""
    return WaterQualityReading(
        ph=7.2,
        turbidity=2.5,
        salinity=32.8,
        dissolved_oxygen=8.5,
        temperature=24.2,
        timestamp=1700000000000,
    )


@pytest.fixture()
def sample_reading_dict() -> dict:
    """Return the expected dictionary representation of ``sample_reading``."""
    return {
        "pH": 7.2,
        "turbidity": 2.5,
        "salinity": 32.8,
        "dissolvedOxygen": 8.5,
        "temperature": 24.2,
        "timestamp": 1700000000000,
    }
