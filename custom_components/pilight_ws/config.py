"""Binding configuration for a single pilight device."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import voluptuous as vol

from .const import (
    CONF_DEVICE,
    CONF_DIMLEVEL_MAX,
    CONF_DIMLEVEL_MIN,
    CONF_HOST,
    CONF_NAME,
    CONF_PORT,
    CONF_SHARED_WS,
    CONF_TYPE,
    DEFAULT_DEVICE,
    DEFAULT_DIMLEVEL_MAX,
    DEFAULT_DIMLEVEL_MIN,
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_SHARED_WS,
    DEFAULT_TYPE,
)
from .conversion import DimLevelRange
from .device_types import DeviceType

# Key used by homebridge-style configuration files.
LEGACY_CONF_SHARED_WS = "sharedWS"

DEVICE_TYPES: tuple[str, ...] = tuple(device_type.value for device_type in DeviceType)


def _check_dim_range(data: dict[str, Any]) -> dict[str, Any]:
    """Ensure the configured dim level bounds form a valid range."""

    if data[CONF_DIMLEVEL_MIN] > data[CONF_DIMLEVEL_MAX]:
        raise vol.Invalid(
            f"{CONF_DIMLEVEL_MIN} must not exceed {CONF_DIMLEVEL_MAX}",
            path=[CONF_DIMLEVEL_MIN],
        )
    return data


DEVICE_SCHEMA = vol.All(
    vol.Schema(
        {
            vol.Optional(CONF_HOST, default=DEFAULT_HOST): vol.All(
                str, vol.Length(min=1)
            ),
            vol.Optional(CONF_PORT, default=DEFAULT_PORT): vol.All(
                vol.Coerce(int), vol.Range(min=1, max=65535)
            ),
            vol.Optional(CONF_DEVICE, default=DEFAULT_DEVICE): vol.All(
                str, vol.Length(min=1)
            ),
            vol.Optional(CONF_NAME): str,
            vol.Optional(CONF_SHARED_WS, default=DEFAULT_SHARED_WS): bool,
            # Unknown types are bound as switches by DeviceType.parse.
            vol.Optional(CONF_TYPE, default=DEFAULT_TYPE): vol.All(
                str, vol.Length(min=1)
            ),
            vol.Optional(CONF_DIMLEVEL_MIN, default=DEFAULT_DIMLEVEL_MIN): vol.All(
                vol.Coerce(int), vol.Range(min=1)
            ),
            vol.Optional(CONF_DIMLEVEL_MAX, default=DEFAULT_DIMLEVEL_MAX): vol.All(
                vol.Coerce(int), vol.Range(min=1, max=100)
            ),
        }
    ),
    _check_dim_range,
)


def normalize_legacy_keys(data: Mapping[str, Any]) -> dict[str, Any]:
    """Translate homebridge-style keys into the integration's keys."""

    normalized = dict(data)
    if LEGACY_CONF_SHARED_WS in normalized:
        legacy = normalized.pop(LEGACY_CONF_SHARED_WS)
        normalized.setdefault(CONF_SHARED_WS, legacy)
    return normalized


@dataclass(frozen=True, slots=True)
class DeviceConfig:
    """Immutable description of one pilight device binding."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    device_id: str = DEFAULT_DEVICE
    name: str = DEFAULT_DEVICE
    device_type: DeviceType = DeviceType.SWITCH
    shared_connection: bool = DEFAULT_SHARED_WS
    dim_range: DimLevelRange = field(default_factory=DimLevelRange)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> DeviceConfig:
        """Build a configuration from raw entry data, applying defaults."""

        data = normalize_legacy_keys(data)
        device_id = data.get(CONF_DEVICE) or DEFAULT_DEVICE
        return cls(
            host=data.get(CONF_HOST) or DEFAULT_HOST,
            port=int(data.get(CONF_PORT) or DEFAULT_PORT),
            device_id=device_id,
            name=data.get(CONF_NAME) or device_id,
            device_type=DeviceType.parse(data.get(CONF_TYPE) or DEFAULT_TYPE),
            shared_connection=bool(data.get(CONF_SHARED_WS, DEFAULT_SHARED_WS)),
            dim_range=DimLevelRange(
                int(data.get(CONF_DIMLEVEL_MIN) or DEFAULT_DIMLEVEL_MIN),
                int(data.get(CONF_DIMLEVEL_MAX) or DEFAULT_DIMLEVEL_MAX),
            ),
        )

    @property
    def address(self) -> str:
        """Return the websocket address of the pilight daemon."""

        return f"ws://{self.host}:{self.port}/"

    @property
    def accessory_id(self) -> str:
        """Return the identity of the binding across restarts."""

        return f"name={self.device_id},{self.address}"

    def as_entry_data(self) -> dict[str, Any]:
        """Serialise the configuration for a config entry."""

        return {
            CONF_HOST: self.host,
            CONF_PORT: self.port,
            CONF_DEVICE: self.device_id,
            CONF_NAME: self.name,
            CONF_SHARED_WS: self.shared_connection,
            CONF_TYPE: self.device_type.value,
            CONF_DIMLEVEL_MIN: self.dim_range.minimum,
            CONF_DIMLEVEL_MAX: self.dim_range.maximum,
        }
