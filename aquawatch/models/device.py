"""Monitoring device definitions.

The fleet is a closed set of three sensor stations.  Each profile carries
the baseline values its generator starts from so that the stations report
distinguishable water.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType

from aquawatch.models.metric import Metric


class DeviceStatus(StrEnum):
    """Simulated connectivity of a device."""

    ONLINE = "online"
    WARNING = "warning"
    OFFLINE = "offline"


@dataclass(frozen=True)
class DeviceProfile:
    """Fixed configuration row for a monitoring station."""

    device_id: str
    name: str
    location: str
    baselines: MappingProxyType[Metric, float] = field(
        default_factory=lambda: MappingProxyType({})
    )


@dataclass(frozen=True)
class Device:
    """Presentation-facing device info as returned by ``list_devices``."""

    device_id: str
    name: str
    location: str
    status: DeviceStatus
    last_seen: int  # epoch milliseconds

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.device_id,
            "name": self.name,
            "location": self.location,
            "status": self.status.value,
            "lastSeen": self.last_seen,
        }


def _baselines(
    ph: float, turbidity: float, salinity: float, do: float, temp: float
) -> MappingProxyType[Metric, float]:
    return MappingProxyType(
        {
            Metric.PH: ph,
            Metric.TURBIDITY: turbidity,
            Metric.SALINITY: salinity,
            Metric.DISSOLVED_OXYGEN: do,
            Metric.TEMPERATURE: temp,
        }
    )


DEVICE_PROFILES: tuple[DeviceProfile, ...] = (
    DeviceProfile(
        device_id="device-001",
        name="Sensor Station Alpha",
        location="North Monitoring Point",
        baselines=_baselines(7.1, 1.8, 33.2, 8.8, 23.5),
    ),
    DeviceProfile(
        device_id="device-002",
        name="Sensor Station Beta",
        location="Central Monitoring Point",
        baselines=_baselines(7.4, 3.2, 32.1, 7.9, 25.1),
    ),
    DeviceProfile(
        device_id="device-003",
        name="Sensor Station Gamma",
        location="South Monitoring Point",
        baselines=_baselines(6.9, 2.1, 34.0, 8.2, 24.8),
    ),
)
