"""Canonical device state and the frame handlers that maintain it."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from types import MappingProxyType
from typing import Any

from ..device_types import DeviceProfile, DeviceType, get_profile
from ..protocol.messages import Update, ValueSnapshot

_LOGGER = logging.getLogger(__name__)


class Phase(str, Enum):
    """Lifecycle of a device state."""

    UNINITIALIZED = "uninitialized"
    POPULATED = "populated"


@dataclass(slots=True)
class DeviceState:
    """Last known values of a pilight device.

    Every field stays ``None`` until a snapshot or update reports it.
    """

    power: bool | None = None
    dim_level: int | None = None
    temperature: float | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return the populated fields."""

        return {
            item.name: getattr(self, item.name)
            for item in fields(self)
            if getattr(self, item.name) is not None
        }


@dataclass(frozen=True, slots=True)
class StateChange:
    """Fields modified by a frame together with their new values."""

    values: MappingProxyType[str, Any] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def from_dict(cls, values: dict[str, Any]) -> StateChange:
        """Build a change from a plain mapping."""

        return cls(MappingProxyType(dict(values)))

    def __bool__(self) -> bool:
        return bool(self.values)

    def __contains__(self, name: object) -> bool:
        return name in self.values

    def get(self, name: str, default: Any = None) -> Any:
        """Return the new value of ``name`` if it changed."""

        return self.values.get(name, default)


def _apply_fields(
    state: DeviceState, profile: DeviceProfile, values: dict[str, Any]
) -> StateChange:
    """Write ``values`` into ``state`` and return what actually changed."""

    parsed = profile.parse_values(values)
    changed: dict[str, Any] = {}
    for name, value in parsed.items():
        if name not in profile.fields:
            continue
        if getattr(state, name) != value:
            changed[name] = value
        setattr(state, name, value)
    return StateChange.from_dict(changed)


def resolve_snapshot(
    snapshot: ValueSnapshot, device_id: str, device_type: DeviceType
) -> DeviceState | None:
    """Extract the state of ``device_id`` from a value snapshot.

    The first group listing the device wins. ``None`` means the device is not
    part of the snapshot, which is expected while pilight has not learnt
    about it yet.
    """

    group = next((group for group in snapshot if group.contains(device_id)), None)
    if group is None:
        return None
    state = DeviceState()
    _apply_fields(state, get_profile(device_type), group.values)
    return state


class StateSynchronizer:
    """Own the canonical state of one device binding.

    Frames for other devices are ignored so several bindings can share one
    connection.
    """

    def __init__(self, device_id: str, device_type: DeviceType) -> None:
        """Bind the synchronizer to a device and its type."""

        self.device_id = device_id
        self.device_type = device_type
        self._profile = get_profile(device_type)
        self._state = DeviceState()
        self._phase = Phase.UNINITIALIZED

    @property
    def state(self) -> DeviceState:
        """Return a copy of the current device state."""

        return replace(self._state)

    @property
    def phase(self) -> Phase:
        """Return the lifecycle phase of the state."""

        return self._phase

    @property
    def populated(self) -> bool:
        """Return True once a snapshot has described the device."""

        return self._phase is Phase.POPULATED

    def apply_snapshot(self, snapshot: ValueSnapshot) -> StateChange | None:
        """Populate the state from ``snapshot``.

        Returns ``None`` when the snapshot does not mention the device.
        """

        resolved = resolve_snapshot(snapshot, self.device_id, self.device_type)
        if resolved is None:
            _LOGGER.debug("Could not find device with id %r", self.device_id)
            return None
        changed: dict[str, Any] = {}
        for name in self._profile.fields:
            value = getattr(resolved, name)
            if value is None:
                continue
            if getattr(self._state, name) != value:
                changed[name] = value
            setattr(self._state, name, value)
        if self._phase is Phase.UNINITIALIZED:
            self._phase = Phase.POPULATED
            _LOGGER.debug(
                "Initialized %s %r with %s",
                self.device_type.value,
                self.device_id,
                self._state.as_dict(),
            )
        return StateChange.from_dict(changed)

    def apply(self, update: Update) -> StateChange | None:
        """Apply an incremental update.

        Returns ``None`` when the update concerns other devices; otherwise the
        change, which is empty when the update repeated known values.
        """

        if not update.contains(self.device_id):
            return None
        change = _apply_fields(self._state, self._profile, update.values)
        if change:
            _LOGGER.debug("Updated %r: %s", self.device_id, dict(change.values))
        return change
