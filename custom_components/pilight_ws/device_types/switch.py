"""On/off device profiles."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .base import (
    FIELD_POWER,
    Capability,
    DeviceProfile,
    DeviceType,
    parse_power,
)


class SwitchProfile(DeviceProfile):
    """Plain on/off switch."""

    device_type = DeviceType.SWITCH
    platform = "switch"
    capabilities = frozenset({Capability.POWER})
    fields = frozenset({FIELD_POWER})

    def parse_values(self, values: Mapping[str, Any]) -> dict[str, Any]:
        """Read the power state."""

        return parse_power(values)


class LampProfile(SwitchProfile):
    """On/off lamp exposed as a light."""

    device_type = DeviceType.LAMP
    platform = "light"
