"""Sensor platform for the pilight websocket integration."""

from __future__ import annotations

from typing import Any

from homeassistant.components.sensor import (
    SensorDeviceClass,
    SensorEntity,
    SensorStateClass,
)
from homeassistant.const import UnitOfTemperature

from .entity import PilightEntity, async_add_platform_entities, resolve_accessory


class PilightTemperatureSensor(PilightEntity, SensorEntity):
    """pilight temperature sensor."""

    _attr_device_class = SensorDeviceClass.TEMPERATURE
    _attr_state_class = SensorStateClass.MEASUREMENT
    _attr_native_unit_of_measurement = UnitOfTemperature.CELSIUS

    @property
    def native_value(self) -> float | None:
        """Return the last reported temperature."""

        return self._read(self._accessory.get_temperature)


async def async_setup_entry(hass: Any, entry: Any, async_add_entities: Any) -> None:
    """Set up the sensor entity for a config entry."""

    accessory = resolve_accessory(hass, entry)
    if accessory is None or accessory.profile.platform != "sensor":
        return

    await async_add_platform_entities(
        async_add_entities, [PilightTemperatureSensor(accessory)]
    )
