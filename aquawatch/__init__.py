"""Simulated water-quality telemetry engine and terminal dashboard."""

__version__ = "1.0.0"
