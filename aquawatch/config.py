"""Centralized configuration loaded from environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass


@dataclass(frozen=True)
class DashboardConfig:
    """Configuration for the water-quality dashboard.

    All values are loaded from environment variables with sensible defaults
    for local use. CLI options take precedence over these values.
    """

    refresh_interval_seconds: float = 30.0
    history_points: int = 20
    history_interval_ms: int = 60_000
    default_device: str = "device-001"
    random_seed: int | None = None
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.refresh_interval_seconds < 0:
            raise ValueError(
                f"refresh_interval_seconds must be >= 0, got {self.refresh_interval_seconds}"
            )
        if self.history_points < 0:
            raise ValueError(f"history_points must be >= 0, got {self.history_points}")
        if self.history_interval_ms <= 0:
            raise ValueError(f"history_interval_ms must be > 0, got {self.history_interval_ms}")

    @classmethod
    def from_env(cls) -> DashboardConfig:
        """Build configuration from environment variables."""
        seed_raw = os.environ.get("RANDOM_SEED", "").strip()

        return cls(
            refresh_interval_seconds=float(os.environ.get("REFRESH_INTERVAL_SECONDS", "30")),
            history_points=int(os.environ.get("HISTORY_POINTS", "20")),
            history_interval_ms=int(os.environ.get("HISTORY_INTERVAL_MS", "60000")),
            default_device=os.environ.get("DEFAULT_DEVICE", "device-001"),
            random_seed=int(seed_raw) if seed_raw else None,
            log_level=os.environ.get("LOG_LEVEL", "INFO"),
        )

    def configure_logging(self) -> None:
        """Set up structured logging based on configured level."""
        logging.basicConfig(
            level=getattr(logging, self.log_level.upper(), logging.INFO),
            format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
