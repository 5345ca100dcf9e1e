"""Fleet-level reading generation."""

from aquawatch.generators.registry import DeviceRegistry

__all__ = [
    "DeviceRegistry",
]
