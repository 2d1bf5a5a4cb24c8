"""Config flow for the pilight websocket integration."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import voluptuous as vol
from homeassistant import config_entries

from .config import DEVICE_SCHEMA, DEVICE_TYPES, DeviceConfig, normalize_legacy_keys
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
    DOMAIN,
)

_LOGGER = logging.getLogger(__name__)


def _build_user_schema(defaults: Mapping[str, Any] | None = None) -> vol.Schema:
    """Construct the form shown to the user, prefilled with ``defaults``."""

    defaults = defaults or {}
    return vol.Schema(
        {
            vol.Required(CONF_HOST, default=defaults.get(CONF_HOST, DEFAULT_HOST)): str,
            vol.Required(CONF_PORT, default=defaults.get(CONF_PORT, DEFAULT_PORT)): int,
            vol.Required(
                CONF_DEVICE, default=defaults.get(CONF_DEVICE, DEFAULT_DEVICE)
            ): str,
            vol.Optional(
                CONF_NAME, description={"suggested_value": defaults.get(CONF_NAME)}
            ): str,
            vol.Required(
                CONF_TYPE, default=defaults.get(CONF_TYPE, DEFAULT_TYPE)
            ): vol.In(DEVICE_TYPES),
            vol.Optional(
                CONF_SHARED_WS,
                default=defaults.get(CONF_SHARED_WS, DEFAULT_SHARED_WS),
            ): bool,
            vol.Optional(
                CONF_DIMLEVEL_MIN,
                default=defaults.get(CONF_DIMLEVEL_MIN, DEFAULT_DIMLEVEL_MIN),
            ): int,
            vol.Optional(
                CONF_DIMLEVEL_MAX,
                default=defaults.get(CONF_DIMLEVEL_MAX, DEFAULT_DIMLEVEL_MAX),
            ): int,
        }
    )


def _validation_error_key(exc: vol.Invalid) -> str:
    """Map a voluptuous error onto a translated error key."""

    if exc.path and exc.path[0] in (CONF_DIMLEVEL_MIN, CONF_DIMLEVEL_MAX):
        return "invalid_dim_range"
    if exc.path and exc.path[0] == CONF_PORT:
        return "invalid_port"
    return "invalid_config"


class PilightConfigFlow(config_entries.ConfigFlow, domain=DOMAIN):
    """Handle the configuration of one pilight device binding."""

    VERSION = 1

    async def async_step_user(self, user_input: dict[str, Any] | None = None) -> Any:
        """Ask for the daemon address and the device to bind."""

        errors: dict[str, str] = {}
        if user_input is not None:
            try:
                data = DEVICE_SCHEMA(user_input)
            except vol.Invalid as exc:
                _LOGGER.debug("Rejected pilight configuration %s: %s", user_input, exc)
                errors["base"] = _validation_error_key(exc)
            else:
                return await self._async_create_entry(data)

        return self.async_show_form(
            step_id="user",
            data_schema=_build_user_schema(user_input),
            errors=errors,
        )

    async def async_step_import(self, import_data: dict[str, Any]) -> Any:
        """Create an entry from a ``configuration.yaml`` device."""

        try:
            data = DEVICE_SCHEMA(normalize_legacy_keys(import_data))
        except vol.Invalid as exc:
            _LOGGER.warning("Invalid pilight configuration %s: %s", import_data, exc)
            return self.async_abort(reason=_validation_error_key(exc))
        return await self._async_create_entry(data)

    async def _async_create_entry(self, data: dict[str, Any]) -> Any:
        """Create the entry unless the binding already exists."""

        config = DeviceConfig.from_mapping(data)
        await self.async_set_unique_id(config.accessory_id)
        self._abort_if_unique_id_configured()
        return self.async_create_entry(title=config.name, data=config.as_entry_data())
