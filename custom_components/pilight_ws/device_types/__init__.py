"""Device type profiles for pilight bindings."""

from __future__ import annotations

from types import MappingProxyType

from .base import (
    FIELD_DIM_LEVEL,
    FIELD_POWER,
    FIELD_TEMPERATURE,
    Capability,
    DeviceProfile,
    DeviceType,
)
from .dimmer import DimmerProfile
from .switch import LampProfile, SwitchProfile
from .temperature_sensor import TemperatureSensorProfile

PROFILES: MappingProxyType[DeviceType, DeviceProfile] = MappingProxyType(
    {
        DeviceType.SWITCH: SwitchProfile(),
        DeviceType.LAMP: LampProfile(),
        DeviceType.DIMMER: DimmerProfile(),
        DeviceType.TEMPERATURE_SENSOR: TemperatureSensorProfile(),
    }
)


def get_profile(device_type: DeviceType) -> DeviceProfile:
    """Return the profile implementing ``device_type``."""

    try:
        return PROFILES[device_type]
    except KeyError as exc:
        raise ValueError(f"No profile registered for {device_type!r}") from exc


__all__ = [
    "FIELD_DIM_LEVEL",
    "FIELD_POWER",
    "FIELD_TEMPERATURE",
    "PROFILES",
    "Capability",
    "DeviceProfile",
    "DeviceType",
    "DimmerProfile",
    "LampProfile",
    "SwitchProfile",
    "TemperatureSensorProfile",
    "get_profile",
]
