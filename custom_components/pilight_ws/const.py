"""Constants for the pilight websocket integration."""

from __future__ import annotations

DOMAIN = "pilight_ws"

CONF_HOST = "host"
CONF_PORT = "port"
CONF_DEVICE = "device"
CONF_NAME = "name"
CONF_SHARED_WS = "shared_ws"
CONF_TYPE = "type"
CONF_DIMLEVEL_MIN = "dimlevel_min"
CONF_DIMLEVEL_MAX = "dimlevel_max"

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 5001
DEFAULT_DEVICE = "lamp"
DEFAULT_SHARED_WS = False
DEFAULT_TYPE = "Switch"
DEFAULT_DIMLEVEL_MIN = 1
DEFAULT_DIMLEVEL_MAX = 16

MANUFACTURER = "pilight"

DATA_CONNECTIONS = "connections"
DATA_ACCESSORY = "accessory"
