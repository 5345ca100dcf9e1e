"""Exceptions raised by the telemetry engine."""

from __future__ import annotations

from collections.abc import Iterable


class UnknownDeviceError(LookupError):
    """A reading or history was requested for a device outside the fleet."""

    def __init__(self, device_id: str, known_ids: Iterable[str] = ()) -> None:
        self.device_id = device_id
        self.known_ids = tuple(known_ids)
        message = f"Device {device_id} not found"
        if self.known_ids:
            message += f" (valid: {', '.join(self.known_ids)})"
        super().__init__(message)
