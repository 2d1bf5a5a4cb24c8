"""Integration entry point for the pilight websocket custom component."""

from __future__ import annotations

import logging
from typing import Any

import voluptuous as vol

from .accessory import PilightAccessory
from .config import DEVICE_SCHEMA, DeviceConfig, normalize_legacy_keys
from .connection import ConnectionManager
from .const import DATA_ACCESSORY, DATA_CONNECTIONS, DOMAIN

_LOGGER = logging.getLogger(__name__)

PLATFORMS: tuple[str, ...] = ("light", "sensor", "switch")

CONFIG_SCHEMA = vol.Schema(
    {vol.Optional(DOMAIN): [vol.All(normalize_legacy_keys, DEVICE_SCHEMA)]},
    extra=vol.ALLOW_EXTRA,
)

__all__ = [
    "CONFIG_SCHEMA",
    "DOMAIN",
    "PLATFORMS",
    "async_setup",
    "async_setup_entry",
    "async_unload_entry",
]


def _get_connection_manager(hass: Any) -> ConnectionManager:
    """Return the connection manager shared by all config entries."""

    domain_data = hass.data.setdefault(DOMAIN, {})
    manager = domain_data.get(DATA_CONNECTIONS)
    if manager is None:
        from homeassistant.helpers.aiohttp_client import async_get_clientsession

        manager = ConnectionManager(async_get_clientsession(hass))
        domain_data[DATA_CONNECTIONS] = manager
    return manager


async def async_setup(hass: Any, config: dict[str, Any]) -> bool:
    """Import devices declared in ``configuration.yaml``."""

    hass.data.setdefault(DOMAIN, {})
    for device in config.get(DOMAIN) or []:
        hass.async_create_task(
            hass.config_entries.flow.async_init(
                DOMAIN, context={"source": "import"}, data=dict(device)
            )
        )
    return True


async def async_setup_entry(hass: Any, entry: Any) -> bool:
    """Bind the configured pilight device and forward its platform."""

    config = DeviceConfig.from_mapping({**entry.data, **entry.options})
    manager = _get_connection_manager(hass)
    if config.shared_connection:
        connection = manager.shared(config.address)
    else:
        connection = manager.simple(config.address)
    _LOGGER.debug(
        "Setting up %r via %s (sharedWS=%s)",
        config.device_id,
        config.address,
        config.shared_connection,
    )

    accessory = PilightAccessory(config, connection)
    hass.data[DOMAIN][entry.entry_id] = {DATA_ACCESSORY: accessory}
    await accessory.async_start()
    await hass.config_entries.async_forward_entry_setups(
        entry, [accessory.profile.platform]
    )
    return True


async def async_unload_entry(hass: Any, entry: Any) -> bool:
    """Unload the platform and release the connection."""

    entry_data = hass.data.get(DOMAIN, {}).get(entry.entry_id)
    if entry_data is None:
        return True
    accessory: PilightAccessory = entry_data[DATA_ACCESSORY]
    unloaded = await hass.config_entries.async_unload_platforms(
        entry, [accessory.profile.platform]
    )
    if not unloaded:
        return False

    await accessory.async_stop()
    if accessory.connection is not None:
        manager = _get_connection_manager(hass)
        await manager.async_release(accessory.connection)
        if accessory.config.shared_connection:
            _LOGGER.debug(
                "Released shared connection %s (%d users left)",
                accessory.connection.address,
                manager.shared_count(accessory.connection.address),
            )
    hass.data[DOMAIN].pop(entry.entry_id, None)
    return True
