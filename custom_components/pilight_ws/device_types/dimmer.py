"""Dimmer device profile."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .base import (
    FIELD_DIM_LEVEL,
    FIELD_POWER,
    Capability,
    DeviceProfile,
    DeviceType,
    parse_power,
)


class DimmerProfile(DeviceProfile):
    """Lamp with a native dim level next to its power state."""

    device_type = DeviceType.DIMMER
    platform = "light"
    capabilities = frozenset({Capability.POWER, Capability.BRIGHTNESS})
    fields = frozenset({FIELD_POWER, FIELD_DIM_LEVEL})

    def parse_values(self, values: Mapping[str, Any]) -> dict[str, Any]:
        """Read power and, when reported, the dim level.

        Power-only messages leave the dim level out so that a previously
        known level survives.
        """

        parsed = parse_power(values)
        dim_level = values.get("dimlevel")
        if isinstance(dim_level, int) and not isinstance(dim_level, bool):
            parsed[FIELD_DIM_LEVEL] = dim_level
        return parsed
