"""Outbound pilight frame builders."""

from __future__ import annotations

import math
from typing import Any

from ..conversion import BRIGHTNESS_MAX, DimLevelRange, is_number
from ..exceptions import ConversionError, InvalidArgumentError

OutboundFrame = dict[str, Any]

ACTION_CONTROL = "control"
ACTION_REQUEST_VALUES = "request values"
STATE_ON = "on"
STATE_OFF = "off"


def encode_request_values() -> OutboundFrame:
    """Return the frame asking pilight for the values of every device."""

    return {"action": ACTION_REQUEST_VALUES}


def encode_set_power(device_id: str, on: bool) -> OutboundFrame:
    """Return the control frame switching ``device_id`` on or off."""

    return {
        "action": ACTION_CONTROL,
        "code": {"device": device_id, "state": STATE_ON if on else STATE_OFF},
    }


def encode_set_dim_level(device_id: str, dim_level: int) -> OutboundFrame:
    """Return the control frame setting the native dim level of ``device_id``."""

    return {
        "action": ACTION_CONTROL,
        "code": {"device": device_id, "values": {"dimlevel": dim_level}},
    }


def encode_set_brightness(
    device_id: str, brightness: Any, dim_range: DimLevelRange
) -> OutboundFrame | None:
    """Return the control frame for a percentage ``brightness``.

    A brightness of exactly zero has no dim level and yields ``None``, which
    callers report as success without sending anything.
    """

    if not is_number(brightness) or math.isnan(brightness):
        raise InvalidArgumentError(f"Not a brightness value: {brightness!r}")
    if brightness == 0:
        return None
    if not 0 < brightness <= BRIGHTNESS_MAX:
        raise InvalidArgumentError(
            f"Brightness {brightness!r} outside 0..{BRIGHTNESS_MAX}"
        )
    try:
        dim_level = dim_range.to_dim_level(brightness)
    except ConversionError as exc:
        raise InvalidArgumentError(str(exc)) from exc
    return encode_set_dim_level(device_id, dim_level)
