"""Device type profiles shared by the resolver, synchronizer and encoder."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any, ClassVar

_LOGGER = logging.getLogger(__name__)

FIELD_POWER = "power"
FIELD_DIM_LEVEL = "dim_level"
FIELD_TEMPERATURE = "temperature"


class DeviceType(str, Enum):
    """Capability profile chosen for a binding at configuration time."""

    SWITCH = "Switch"
    LAMP = "Lamp"
    DIMMER = "Dimmer"
    TEMPERATURE_SENSOR = "TemperatureSensor"

    @classmethod
    def parse(cls, value: Any) -> DeviceType:
        """Return the device type named by ``value``, defaulting to a switch."""

        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            _LOGGER.warning("Unknown device type %r, treating it as a Switch", value)
            return cls.SWITCH


class Capability(str, Enum):
    """Characteristic a profile exposes to the accessory host."""

    POWER = "power"
    BRIGHTNESS = "brightness"
    TEMPERATURE = "temperature"


def parse_power(values: Mapping[str, Any]) -> dict[str, Any]:
    """Map the pilight ``state`` value onto the power field."""

    if "state" not in values:
        return {}
    return {FIELD_POWER: values["state"] == "on"}


class DeviceProfile:
    """Describe which state fields and commands a device type supports."""

    device_type: ClassVar[DeviceType]
    platform: ClassVar[str]
    capabilities: ClassVar[frozenset[Capability]]
    fields: ClassVar[frozenset[str]]

    def parse_values(self, values: Mapping[str, Any]) -> dict[str, Any]:
        """Return the state fields carried by a pilight ``values`` mapping."""

        raise NotImplementedError

    def supports(self, capability: Capability) -> bool:
        """Return True when the profile exposes ``capability``."""

        return capability in self.capabilities

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.device_type.value}>"
