"""Multi-device registry owning one reading generator per station.

The registry is built once from a closed set of ``DeviceProfile`` rows.
Every profile gets its own ``ReadingGenerator`` seeded with the station's
baseline values; drift vectors are randomised independently per device.
Device connectivity (status / last-seen) is presentation flavour only: it is
resampled on every ``list_devices()`` call and never looks at telemetry.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

import numpy as np

from aquawatch.errors import UnknownDeviceError
from aquawatch.models.device import DEVICE_PROFILES, Device, DeviceProfile, DeviceStatus
from aquawatch.models.reading import WaterQualityReading
from aquawatch.patterns.random_walk import (
    DEFAULT_HISTORY_INTERVAL_MS,
    GeneratorState,
    ReadingGenerator,
)

logger = logging.getLogger(__name__)

ONLINE_PROBABILITY = 0.9
LAST_SEEN_WINDOW_MS = 300_000
DEFAULT_HISTORY_POINTS = 20


@dataclass
class _Slot:
    profile: DeviceProfile
    generator: ReadingGenerator
    lock: threading.Lock


class DeviceRegistry:
    """Owns the simulated fleet and routes requests to per-device generators."""

    def __init__(
        self,
        profiles: Iterable[DeviceProfile] = DEVICE_PROFILES,
        rng: np.random.Generator | None = None,
        history_interval_ms: int = DEFAULT_HISTORY_INTERVAL_MS,
    ) -> None:
        self._rng = np.random.default_rng() if rng is None else rng
        self._history_interval_ms = history_interval_ms

        profiles = list(profiles)
        device_rngs = self._rng.spawn(len(profiles))
        self._slots: dict[str, _Slot] = {}
        for profile, device_rng in zip(profiles, device_rngs):
            if profile.device_id in self._slots:
                raise ValueError(f"Duplicate device id: {profile.device_id}")
            self._slots[profile.device_id] = _Slot(
                profile=profile,
                generator=ReadingGenerator(initial_baselines=profile.baselines, rng=device_rng),
                lock=threading.Lock(),
            )

        logger.info("Device registry initialised with %d devices: %s", len(self), self.device_ids)

    # ── Lookup ─────────────────────────────────────────────────────────

    @property
    def device_ids(self) -> list[str]:
        return list(self._slots)

    def __contains__(self, device_id: object) -> bool:
        return isinstance(device_id, str) and device_id in self._slots

    def __len__(self) -> int:
        return len(self._slots)

    def __iter__(self) -> Iterator[str]:
        return iter(self._slots)

    def _slot(self, device_id: str) -> _Slot:
        try:
            return self._slots[device_id]
        except (KeyError, TypeError):  # TypeError: unhashable id
            logger.warning("Unknown device requested: %s", device_id)
            raise UnknownDeviceError(device_id, self._slots) from None

    def get_profile(self, device_id: str) -> DeviceProfile:
        return self._slot(device_id).profile

    # ── Telemetry ──────────────────────────────────────────────────────

    def get_reading(self, device_id: str) -> WaterQualityReading:
        """Advance the device's generator by one step."""
        slot = self._slot(device_id)
        with slot.lock:
            return slot.generator.step()

    def get_history(
        self,
        device_id: str,
        points: int = DEFAULT_HISTORY_POINTS,
    ) -> list[WaterQualityReading]:
        """Backfill *points* readings for the device, one interval apart."""
        slot = self._slot(device_id)
        with slot.lock:
            return slot.generator.backfill(points, self._history_interval_ms)

    def get_state(self, device_id: str) -> GeneratorState:
        """Current baseline and trend vectors of the device's generator."""
        slot = self._slot(device_id)
        with slot.lock:
            return slot.generator.state

    # ── Fleet health simulation ────────────────────────────────────────

    def _sample_status(self) -> DeviceStatus:
        if float(self._rng.random()) < ONLINE_PROBABILITY:
            return DeviceStatus.ONLINE
        return DeviceStatus.WARNING if float(self._rng.random()) < 0.5 else DeviceStatus.OFFLINE

    def list_devices(self) -> list[Device]:
        """Return every configured device with freshly sampled connectivity."""
        now_ms = int(time.time() * 1000)
        devices = [
            Device(
                device_id=slot.profile.device_id,
                name=slot.profile.name,
                location=slot.profile.location,
                status=self._sample_status(),
                last_seen=now_ms - int(self._rng.uniform(0, LAST_SEEN_WINDOW_MS)),
            )
            for slot in self._slots.values()
        ]
        logger.debug(
            "Device status: %s",
            ", ".join(f"{d.device_id}={d.status}" for d in devices),
        )
        return devices
