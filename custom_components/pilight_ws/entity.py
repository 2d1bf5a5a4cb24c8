"""Shared entity helpers for the pilight websocket integration."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.device_registry import DeviceInfo
from homeassistant.helpers.entity import Entity

from .accessory import PilightAccessory
from .const import DATA_ACCESSORY, DOMAIN, MANUFACTURER
from .exceptions import ConversionError, DeviceNotFoundError, PilightError
from .state import StateChange

T = TypeVar("T")


class PilightEntity(Entity):
    """Base entity exposing one pilight accessory to Home Assistant."""

    _attr_should_poll = False
    _attr_has_entity_name = True
    _attr_name = None

    def __init__(self, accessory: PilightAccessory) -> None:
        """Bind the entity to ``accessory``."""

        self._accessory = accessory
        self._remove_listener: Callable[[], None] | None = None
        config = accessory.config
        self._attr_unique_id = config.accessory_id
        self._attr_device_info = DeviceInfo(
            identifiers={(DOMAIN, config.accessory_id)},
            manufacturer=MANUFACTURER,
            model=config.device_type.value,
            name=config.name,
        )

    async def async_added_to_hass(self) -> None:
        """Write state whenever the accessory reports a change."""

        self._remove_listener = self._accessory.add_listener(self._handle_state_change)

    async def async_will_remove_from_hass(self) -> None:
        """Detach from the accessory."""

        if self._remove_listener is not None:
            self._remove_listener()
            self._remove_listener = None

    def _handle_state_change(self, change: StateChange) -> None:
        """Push a state change into Home Assistant."""

        if self.hass is not None:
            self.async_write_ha_state()

    @staticmethod
    def _read(getter: Callable[[], T]) -> T | None:
        """Return the value of ``getter`` or ``None`` while it is unknown."""

        try:
            return getter()
        except (ConversionError, DeviceNotFoundError):
            return None

    @staticmethod
    async def _async_command(action: Awaitable[None]) -> None:
        """Await an accessory command, surfacing failures to the caller."""

        try:
            await action
        except PilightError as exc:
            raise HomeAssistantError(str(exc)) from exc


def resolve_accessory(hass: Any, entry: Any) -> PilightAccessory | None:
    """Return the accessory bound to ``entry`` when available."""

    entry_data = hass.data.get(DOMAIN, {}).get(entry.entry_id)
    if isinstance(entry_data, dict):
        return entry_data.get(DATA_ACCESSORY)
    return None


async def async_add_platform_entities(
    async_add_entities: Callable[[list[Any]], Any], entities: list[Any]
) -> None:
    """Add entities for a Home Assistant platform, awaiting when required."""

    if not entities:
        return
    result = async_add_entities(entities)
    if asyncio.iscoroutine(result):
        await result
