"""CLI entrypoint for the water-quality monitoring dashboard.

Drives the simulated telemetry engine for three monitoring stations and
renders readings, history and fleet status to the terminal.

Usage::

    aquawatch devices
    aquawatch reading device-002
    aquawatch history device-001 --points 10
    aquawatch watch --device device-003 --interval 30
    aquawatch watch --interval 10 --rotate-every 3
"""

from __future__ import annotations

import dataclasses
import json
import logging
import signal
import sys
import time

import click
import numpy as np

from aquawatch.config import DashboardConfig
from aquawatch.dashboard import Dashboard
from aquawatch.errors import UnknownDeviceError
from aquawatch.generators.registry import DeviceRegistry
from aquawatch.patterns.classification import OverallStatus
from aquawatch.render import render_devices, render_history, render_reading, render_snapshot

logger = logging.getLogger(__name__)

# ── Shared state for graceful shutdown ──────────────────────────────────

_shutdown_requested = False


def _handle_sigint(signum: int, frame: object) -> None:
    global _shutdown_requested  # noqa: PLW0603
    _shutdown_requested = True
    logger.info("Shutdown requested (SIGINT) -- finishing current cycle")


# ── Stats tracker ───────────────────────────────────────────────────────


class _Stats:
    """Counts refreshes per overall status and logs them periodically."""

    def __init__(self, report_interval: float = 300.0) -> None:
        self.refreshes = 0
        self.by_status: dict[OverallStatus, int] = dict.fromkeys(OverallStatus, 0)
        self._last_report = time.monotonic()
        self._report_interval = report_interval

    def record(self, status: OverallStatus) -> None:
        self.refreshes += 1
        self.by_status[status] += 1

    def maybe_report(self) -> None:
        now = time.monotonic()
        if now - self._last_report >= self._report_interval:
            logger.info(
                "STATS | refreshes=%d | %s",
                self.refreshes,
                " ".join(f"{s.value}={n}" for s, n in self.by_status.items()),
            )
            self.refreshes = 0
            self.by_status = dict.fromkeys(OverallStatus, 0)
            self._last_report = now


# ── Helpers ─────────────────────────────────────────────────────────────


def _build_registry(config: DashboardConfig) -> DeviceRegistry:
    return DeviceRegistry(
        rng=np.random.default_rng(config.random_seed),
        history_interval_ms=config.history_interval_ms,
    )


def _fail_unknown_device(exc: UnknownDeviceError) -> None:
    logger.error("Unknown device: %s (valid: %s)", exc.device_id, list(exc.known_ids))
    click.echo(f"Error: {exc}", err=True)
    sys.exit(1)


def _next_device(registry: DeviceRegistry, device_id: str) -> str:
    ids = registry.device_ids
    return ids[(ids.index(device_id) + 1) % len(ids)]


# ── CLI definition ──────────────────────────────────────────────────────


@click.group("aquawatch")
@click.option(
    "--log-level",
    default=None,
    help="Logging level (overrides LOG_LEVEL env var).",
)
@click.option(
    "--seed",
    default=None,
    type=int,
    help="Random seed for reproducible telemetry (overrides RANDOM_SEED env var).",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None, seed: int | None) -> None:
    """Water-quality monitoring dashboard over simulated device telemetry."""
    overrides = {}
    if log_level:
        overrides["log_level"] = log_level
    if seed is not None:
        overrides["random_seed"] = seed
    try:
        config = DashboardConfig.from_env()
        if overrides:
            config = dataclasses.replace(config, **overrides)
    except ValueError as exc:
        logger.error("Invalid configuration: %s", exc)
        click.echo(f"Error: invalid configuration: {exc}", err=True)
        sys.exit(1)
    config.configure_logging()
    ctx.obj = config


@cli.command("devices")
@click.option("--json", "as_json", is_flag=True, help="Emit JSON instead of a table.")
@click.pass_obj
def devices_cmd(config: DashboardConfig, as_json: bool) -> None:
    """List monitoring devices with their simulated connectivity."""
    registry = _build_registry(config)
    devices = registry.list_devices()
    if as_json:
        click.echo(json.dumps([d.to_dict() for d in devices], indent=2))
    else:
        render_devices(devices)


@cli.command("reading")
@click.argument("device_id")
@click.option("--json", "as_json", is_flag=True, help="Emit JSON instead of a table.")
@click.pass_obj
def reading_cmd(config: DashboardConfig, device_id: str, as_json: bool) -> None:
    """Produce one reading for DEVICE_ID."""
    registry = _build_registry(config)
    try:
        reading = registry.get_reading(device_id)
    except UnknownDeviceError as exc:
        _fail_unknown_device(exc)
        return

    if as_json:
        click.echo(reading.to_json())
    else:
        render_reading(device_id, reading)


@cli.command("history")
@click.argument("device_id")
@click.option(
    "--points",
    default=None,
    type=click.IntRange(min=0),
    help="Number of history points (overrides HISTORY_POINTS env var).",
)
@click.option("--json", "as_json", is_flag=True, help="Emit JSON instead of a table.")
@click.pass_obj
def history_cmd(
    config: DashboardConfig,
    device_id: str,
    points: int | None,
    as_json: bool,
) -> None:
    """Backfill a minute-spaced reading history for DEVICE_ID."""
    registry = _build_registry(config)
    n_points = points if points is not None else config.history_points
    try:
        history = registry.get_history(device_id, n_points)
    except UnknownDeviceError as exc:
        _fail_unknown_device(exc)
        return

    if as_json:
        click.echo(json.dumps([r.to_dict() for r in history], indent=2, ensure_ascii=False))
    else:
        render_history(device_id, history)


@cli.command("watch")
@click.option(
    "--device",
    "device_id",
    default=None,
    help="Device to display (overrides DEFAULT_DEVICE env var).",
)
@click.option(
    "--interval",
    default=None,
    type=click.FloatRange(min=0),
    help="Seconds between refreshes (overrides REFRESH_INTERVAL_SECONDS env var).",
)
@click.option(
    "--cycles",
    default=None,
    type=click.IntRange(min=1),
    help="Stop after this many refreshes (default: run until Ctrl+C).",
)
@click.option(
    "--rotate-every",
    default=0,
    type=click.IntRange(min=0),
    help="Switch to the next device every N refreshes (0 keeps the selected device).",
)
@click.pass_obj
def watch_cmd(
    config: DashboardConfig,
    device_id: str | None,
    interval: float | None,
    cycles: int | None,
    rotate_every: int,
) -> None:
    """Live dashboard refreshing on a fixed timer."""
    global _shutdown_requested  # noqa: PLW0603
    _shutdown_requested = False

    selected = device_id or config.default_device
    interval_sec = interval if interval is not None else config.refresh_interval_seconds

    registry = _build_registry(config)
    try:
        dashboard = Dashboard(registry, selected, history_points=config.history_points)
    except UnknownDeviceError as exc:
        _fail_unknown_device(exc)
        return

    signal.signal(signal.SIGINT, _handle_sigint)

    stats = _Stats()
    completed = 0
    logger.info("Dashboard started for %s | interval=%.1fs", selected, interval_sec)

    try:
        snapshot = dashboard.snapshot()
        render_snapshot(snapshot)
        while not _shutdown_requested and (cycles is None or completed < cycles):
            cycle_start = time.monotonic()

            # Sleep for the remainder of the interval
            while not _shutdown_requested:
                remaining = interval_sec - (time.monotonic() - cycle_start)
                if remaining <= 0:
                    break
                time.sleep(min(remaining, 0.5))
            if _shutdown_requested:
                break

            if rotate_every and (completed + 1) % rotate_every == 0:
                dashboard.select(_next_device(registry, dashboard.device_id))
            else:
                dashboard.tick()
            snapshot = dashboard.snapshot()
            click.echo()
            render_snapshot(snapshot)

            completed += 1
            stats.record(snapshot.overall)
            stats.maybe_report()

    except KeyboardInterrupt:
        logger.info("KeyboardInterrupt received")
    finally:
        signal.signal(signal.SIGINT, signal.default_int_handler)
        logger.info("Dashboard stopped after %d refreshes", completed)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
