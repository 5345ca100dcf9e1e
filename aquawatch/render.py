"""Terminal rendering of dashboard snapshots, device lists and readings."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime

import click

from aquawatch.dashboard import DashboardSnapshot
from aquawatch.models.device import Device, DeviceStatus
from aquawatch.models.metric import METRIC_CONFIGS, METRIC_ORDER
from aquawatch.models.reading import WaterQualityReading
from aquawatch.patterns.classification import (
    MetricStatus,
    OverallStatus,
    TrendDirection,
    classify_reading,
)

_STATUS_COLORS: dict[str, str] = {
    MetricStatus.NORMAL: "green",
    MetricStatus.WARNING: "yellow",
    MetricStatus.CRITICAL: "red",
    OverallStatus.EXCELLENT: "green",
    OverallStatus.GOOD: "blue",
    DeviceStatus.ONLINE: "green",
    DeviceStatus.OFFLINE: "red",
}

_TREND_ARROWS: dict[TrendDirection, str] = {
    TrendDirection.UP: "↑",
    TrendDirection.DOWN: "↓",
    TrendDirection.STABLE: "→",
}

_SPARK_BLOCKS = "▁▂▃▄▅▆▇█"


def format_time(epoch_ms: int) -> str:
    return datetime.fromtimestamp(epoch_ms / 1000).strftime("%H:%M:%S")


def styled_status(status: str) -> str:
    return click.style(status.upper(), fg=_STATUS_COLORS.get(status, "white"), bold=True)


def render_devices(devices: Iterable[Device]) -> None:
    click.secho("Devices", bold=True)
    for device in devices:
        click.echo(
            f"  {device.device_id}  {device.name:<22} {device.location:<26} "
            f"{styled_status(device.status)}  last seen {format_time(device.last_seen)}"
        )


def render_reading(device_id: str, reading: WaterQualityReading) -> None:
    click.secho(f"{device_id} @ {format_time(reading.timestamp)}", bold=True)
    statuses = classify_reading(reading)
    for metric in METRIC_ORDER:
        config = METRIC_CONFIGS[metric]
        click.echo(
            f"  {config.title:<18} {reading.value(metric):>8.2f} {config.unit:<5} "
            f"{styled_status(statuses[metric])}"
        )


def render_history(device_id: str, history: Sequence[WaterQualityReading]) -> None:
    click.secho(f"History for {device_id} ({len(history)} points)", bold=True)
    header = "  time      " + " ".join(f"{m.value:>16}" for m in METRIC_ORDER)
    click.echo(header)
    for reading in history:
        row = " ".join(f"{v:>16.2f}" for v in reading.values())
        click.echo(f"  {format_time(reading.timestamp)}  {row}")


def sparkline(values: Sequence[float]) -> str:
    """Scale *values* onto block characters, lowest to highest."""
    if not values:
        return ""
    low, high = min(values), max(values)
    span = high - low
    if span == 0:
        return _SPARK_BLOCKS[len(_SPARK_BLOCKS) // 2] * len(values)
    top = len(_SPARK_BLOCKS) - 1
    return "".join(_SPARK_BLOCKS[round((v - low) / span * top)] for v in values)


def render_snapshot(snapshot: DashboardSnapshot) -> None:
    title = snapshot.device.name if snapshot.device else snapshot.device_id
    click.secho(f"Water Monitoring Dashboard -- {title}", bold=True)
    click.echo(
        f"System status: {styled_status(snapshot.overall)} "
        f"({snapshot.overall.description}) | last update {format_time(snapshot.last_update)}"
    )

    for card in snapshot.metrics:
        config = METRIC_CONFIGS[card.metric]
        click.echo(
            f"  {card.title:<18} {card.value:>8.2f} {card.unit:<5} "
            f"{_TREND_ARROWS[card.trend]} {styled_status(card.status)}"
        )
        click.echo(
            f"  {'':<18} Range: {config.min:g} - {config.max:g} | "
            f"optimal {config.optimal.min:g} - {config.optimal.max:g}"
        )

    click.secho(f"History ({len(snapshot.history)} points)", bold=True)
    for metric in METRIC_ORDER:
        series = [reading.value(metric) for reading in snapshot.history]
        last = f"{series[-1]:>8.2f}" if series else f"{'-':>8}"
        click.echo(f"  {METRIC_CONFIGS[metric].title:<18} {last}  {sparkline(series)}")

    click.secho("Devices", bold=True)
    for device in snapshot.devices:
        marker = "*" if device.device_id == snapshot.device_id else " "
        click.echo(
            f" {marker}{device.device_id}  {device.name:<22} {device.location:<26} "
            f"{styled_status(device.status)}"
        )
