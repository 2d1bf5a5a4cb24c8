"""pilight websocket protocol frames."""

from .commands import (
    OutboundFrame,
    encode_request_values,
    encode_set_brightness,
    encode_set_dim_level,
    encode_set_power,
)
from .messages import (
    DeviceGroup,
    Frame,
    Update,
    ValueSnapshot,
    classify,
)

__all__ = [
    "DeviceGroup",
    "Frame",
    "OutboundFrame",
    "Update",
    "ValueSnapshot",
    "classify",
    "encode_request_values",
    "encode_set_brightness",
    "encode_set_dim_level",
    "encode_set_power",
]
