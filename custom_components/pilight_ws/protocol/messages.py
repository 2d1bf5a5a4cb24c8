"""Inbound pilight frame models and classification."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, TypeAlias

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from ..exceptions import ClassificationError


class DeviceGroup(BaseModel):
    """A set of devices sharing one set of values.

    pilight adds bookkeeping keys such as ``origin``, ``type`` or ``uuid``;
    they carry no device state and are ignored.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    devices: frozenset[str]
    values: dict[str, Any]

    def contains(self, device_id: str) -> bool:
        """Return True when ``device_id`` is part of this group."""

        return device_id in self.devices


class Update(DeviceGroup):
    """Incremental change reported for one or more devices."""


ValueSnapshot: TypeAlias = tuple[DeviceGroup, ...]
Frame: TypeAlias = ValueSnapshot | Update

VALUES_MESSAGE = "values"

_SNAPSHOT_ADAPTER: TypeAdapter[tuple[DeviceGroup, ...]] = TypeAdapter(
    tuple[DeviceGroup, ...]
)


def classify(raw: Any) -> Frame | ClassificationError:
    """Classify a decoded pilight frame.

    A sequence of device groups is a snapshot, a single device group is an
    update. pilight daemons that wrap the snapshot as
    ``{"message": "values", "values": [...]}`` are unwrapped first. Any other
    shape is returned as a ``ClassificationError``.
    """

    if isinstance(raw, Mapping) and raw.get("message") == VALUES_MESSAGE:
        raw = raw.get("values")
    try:
        if isinstance(raw, Mapping):
            return Update.model_validate(raw)
        if isinstance(raw, Sequence) and not isinstance(raw, str | bytes | bytearray):
            return _SNAPSHOT_ADAPTER.validate_python(list(raw))
    except ValidationError as exc:
        return ClassificationError(exc, raw)
    return ClassificationError(
        TypeError(f"Unsupported frame type {type(raw).__name__}"), raw
    )
