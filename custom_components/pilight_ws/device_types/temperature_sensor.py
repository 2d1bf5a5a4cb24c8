"""Temperature sensor profile."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..conversion import is_number
from .base import FIELD_TEMPERATURE, Capability, DeviceProfile, DeviceType


class TemperatureSensorProfile(DeviceProfile):
    """Read-only sensor reporting a temperature."""

    device_type = DeviceType.TEMPERATURE_SENSOR
    platform = "sensor"
    capabilities = frozenset({Capability.TEMPERATURE})
    fields = frozenset({FIELD_TEMPERATURE})

    def parse_values(self, values: Mapping[str, Any]) -> dict[str, Any]:
        """Read the temperature when it is reported as a number."""

        temperature = values.get("temperature")
        if not is_number(temperature):
            return {}
        return {FIELD_TEMPERATURE: temperature}
