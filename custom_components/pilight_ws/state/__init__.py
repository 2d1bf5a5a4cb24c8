"""Device state tracking for pilight bindings."""

from .device_state import (
    DeviceState,
    Phase,
    StateChange,
    StateSynchronizer,
    resolve_snapshot,
)

__all__ = [
    "DeviceState",
    "Phase",
    "StateChange",
    "StateSynchronizer",
    "resolve_snapshot",
]
