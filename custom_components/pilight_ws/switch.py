"""Switch platform for the pilight websocket integration."""

from __future__ import annotations

from typing import Any

from homeassistant.components.switch import SwitchEntity

from .entity import PilightEntity, async_add_platform_entities, resolve_accessory


class PilightSwitch(PilightEntity, SwitchEntity):
    """pilight device exposed as an on/off switch."""

    @property
    def is_on(self) -> bool | None:
        """Return the last reported power state."""

        return self._read(self._accessory.get_power)

    async def async_turn_on(self, **kwargs: Any) -> None:
        """Turn the switch on."""

        await self._async_command(self._accessory.async_set_power(True))

    async def async_turn_off(self, **kwargs: Any) -> None:
        """Turn the switch off."""

        await self._async_command(self._accessory.async_set_power(False))


async def async_setup_entry(hass: Any, entry: Any, async_add_entities: Any) -> None:
    """Set up the switch entity for a config entry."""

    accessory = resolve_accessory(hass, entry)
    if accessory is None or accessory.profile.platform != "switch":
        return

    await async_add_platform_entities(async_add_entities, [PilightSwitch(accessory)])
