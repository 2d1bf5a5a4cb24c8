"""Light platform for the pilight websocket integration."""

from __future__ import annotations

from typing import Any

from homeassistant.components.light import ATTR_BRIGHTNESS, ColorMode, LightEntity

from .accessory import PilightAccessory
from .device_types import Capability
from .entity import PilightEntity, async_add_platform_entities, resolve_accessory


class PilightLight(PilightEntity, LightEntity):
    """pilight lamp or dimmer exposed as a light."""

    def __init__(self, accessory: PilightAccessory) -> None:
        """Pick the color mode from the accessory capabilities."""

        super().__init__(accessory)
        self._dimmable = Capability.BRIGHTNESS in accessory.capabilities
        mode = ColorMode.BRIGHTNESS if self._dimmable else ColorMode.ONOFF
        self._attr_color_mode = mode
        self._attr_supported_color_modes = {mode}

    @staticmethod
    def _percent_to_brightness(percent: int) -> int:
        """Convert a device brightness percentage to Home Assistant scale."""

        return round(percent * 255 / 100)

    @staticmethod
    def _brightness_to_percent(value: float | int) -> int:
        """Convert Home Assistant brightness to a device percentage."""

        if value <= 0:
            return 0
        return max(1, min(100, round(value * 100 / 255)))

    @property
    def is_on(self) -> bool | None:
        """Return the last reported power state."""

        return self._read(self._accessory.get_power)

    @property
    def brightness(self) -> int | None:
        """Return the Home Assistant brightness of a dimmer."""

        if not self._dimmable:
            return None
        percent = self._read(self._accessory.get_dim_level)
        if percent is None:
            return None
        return self._percent_to_brightness(percent)

    async def async_turn_on(self, **kwargs: Any) -> None:
        """Turn the light on, dimming first when a brightness is given."""

        brightness = kwargs.get(ATTR_BRIGHTNESS)
        if self._dimmable and brightness is not None:
            await self._async_command(
                self._accessory.async_set_dim_level(
                    self._brightness_to_percent(brightness)
                )
            )
            if self.is_on:
                return
        await self._async_command(self._accessory.async_set_power(True))

    async def async_turn_off(self, **kwargs: Any) -> None:
        """Turn the light off."""

        await self._async_command(self._accessory.async_set_power(False))


async def async_setup_entry(hass: Any, entry: Any, async_add_entities: Any) -> None:
    """Set up the light entity for a config entry."""

    accessory = resolve_accessory(hass, entry)
    if accessory is None or accessory.profile.platform != "light":
        return

    await async_add_platform_entities(async_add_entities, [PilightLight(accessory)])
