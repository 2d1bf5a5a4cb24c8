"""Accessory adapter binding one pilight device to the exposition layer."""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Callable
from typing import Any

from .config import DeviceConfig
from .connection import ConnectionEvent, PilightConnection
from .device_types import (
    FIELD_DIM_LEVEL,
    FIELD_POWER,
    FIELD_TEMPERATURE,
    Capability,
    DeviceProfile,
    get_profile,
)
from .exceptions import (
    ClassificationError,
    DeviceNotFoundError,
    InvalidArgumentError,
    NotConnectedError,
)
from .protocol import (
    Update,
    classify,
    encode_request_values,
    encode_set_brightness,
    encode_set_power,
)
from .state import DeviceState, StateChange, StateSynchronizer

_LOGGER = logging.getLogger(__name__)

StateListener = Callable[[StateChange], None]


class PilightAccessory:
    """Route connection events into the state engine and commands out of it."""

    def __init__(
        self, config: DeviceConfig, connection: PilightConnection | None
    ) -> None:
        """Create the binding; call ``async_start`` to begin listening."""

        self.config = config
        self.connection = connection
        self.profile: DeviceProfile = get_profile(config.device_type)
        self.capabilities: frozenset[Capability] = self.profile.capabilities
        self._synchronizer = StateSynchronizer(config.device_id, config.device_type)
        self._listeners: list[StateListener] = []
        self._unsubscribers: list[Callable[[], None]] = []

    @property
    def name(self) -> str:
        """Return the display name of the device."""

        return self.config.name

    @property
    def device_id(self) -> str:
        """Return the pilight identifier of the device."""

        return self.config.device_id

    @property
    def state(self) -> DeviceState:
        """Return a copy of the last known device state."""

        return self._synchronizer.state

    @property
    def populated(self) -> bool:
        """Return True once a snapshot described the device."""

        return self._synchronizer.populated

    @property
    def connected(self) -> bool:
        """Return True when commands can be sent."""

        return self.connection is not None and self.connection.connected

    async def async_start(self) -> None:
        """Subscribe to connection events and open the connection."""

        connection = self.connection
        if connection is None:
            raise NotConnectedError("No connection configured")
        _LOGGER.debug(
            "Binding %r on %s (shared=%s)",
            self.device_id,
            self.config.address,
            self.config.shared_connection,
        )
        self._unsubscribers = [
            connection.subscribe(ConnectionEvent.READY, self._async_handle_ready),
            connection.subscribe(ConnectionEvent.ERROR, self._handle_error),
            connection.subscribe(ConnectionEvent.FRAME, self.handle_frame),
            connection.subscribe(ConnectionEvent.FRAME_ERROR, self._handle_frame_error),
        ]
        if connection.connected:
            await self._async_handle_ready()
        await connection.async_connect()

    async def async_stop(self) -> None:
        """Detach from the connection."""

        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    def add_listener(self, listener: StateListener) -> Callable[[], None]:
        """Register ``listener`` for state changes and return a remover."""

        self._listeners.append(listener)

        def _remove() -> None:
            with contextlib.suppress(ValueError):
                self._listeners.remove(listener)

        return _remove

    async def _async_handle_ready(self) -> None:
        """Ask pilight for the values of every device."""

        _LOGGER.debug("Requesting initial states for %r", self.device_id)
        try:
            await self._async_send(encode_request_values())
        except NotConnectedError as exc:
            _LOGGER.warning("Could not request values for %r: %s", self.device_id, exc)

    def _handle_error(self, error: Exception) -> None:
        """Note a transport error; the connection reconnects on its own."""

        _LOGGER.debug("Connection error for %r: %s", self.device_id, error)

    def _handle_frame_error(self, error: Exception) -> None:
        """Report a frame the connection could not decode."""

        self._report_classification_error(ClassificationError(error, decode_error=True))

    def _report_classification_error(self, error: ClassificationError) -> None:
        """Log a dropped frame."""

        if error.decode_error:
            _LOGGER.warning("Cannot parse message: %s", error)
        else:
            _LOGGER.debug("Ignoring unrecognized frame %r: %s", error.raw, error)

    def handle_frame(self, raw: Any) -> StateChange | None:
        """Classify a decoded frame and apply it to the device state."""

        frame = classify(raw)
        if isinstance(frame, ClassificationError):
            self._report_classification_error(frame)
            return None
        if isinstance(frame, Update):
            change = self._synchronizer.apply(frame)
        else:
            change = self._synchronizer.apply_snapshot(frame)
        if change:
            self._notify(change)
        return change

    def _notify(self, change: StateChange) -> None:
        """Hand ``change`` to every registered listener."""

        for listener in list(self._listeners):
            listener(change)

    def _require(self, field: str, label: str) -> Any:
        """Return the state field ``field`` or raise when it is unknown."""

        value = getattr(self._synchronizer.state, field)
        if value is None:
            _LOGGER.debug("No %s found for %r", label, self.device_id)
            raise DeviceNotFoundError(f"No {label} known for {self.device_id}")
        return value

    def get_power(self) -> bool:
        """Return the last reported power state."""

        return self._require(FIELD_POWER, "power state")

    def get_dim_level(self) -> int:
        """Return the last reported dim level as a brightness percentage."""

        dim_level = self._require(FIELD_DIM_LEVEL, "dim level")
        if dim_level == 0:
            raise DeviceNotFoundError(f"No dim level known for {self.device_id}")
        return self.config.dim_range.to_brightness(dim_level)

    def get_temperature(self) -> float:
        """Return the last reported temperature."""

        return self._require(FIELD_TEMPERATURE, "temperature")

    async def async_set_power(self, on: bool) -> None:
        """Switch the device on or off."""

        self._ensure_connected()
        self._ensure_capability(Capability.POWER)
        if not isinstance(on, bool):
            raise InvalidArgumentError(f"Not a power state: {on!r}")
        frame = encode_set_power(self.device_id, on)
        _LOGGER.debug("Setting power of %r to %s", self.device_id, frame["code"]["state"])
        await self._async_send(frame)

    async def async_set_dim_level(self, brightness: Any) -> None:
        """Dim the device to ``brightness`` percent; zero is ignored."""

        self._ensure_connected()
        self._ensure_capability(Capability.BRIGHTNESS)
        frame = encode_set_brightness(self.device_id, brightness, self.config.dim_range)
        if frame is None:
            return
        _LOGGER.debug(
            "Setting dim level of %r to %s for %s%%",
            self.device_id,
            frame["code"]["values"]["dimlevel"],
            brightness,
        )
        await self._async_send(frame)

    def _ensure_connected(self) -> None:
        """Raise unless a command can reach the daemon."""

        if not self.connected:
            raise NotConnectedError(f"No connection for {self.device_id}")

    def _ensure_capability(self, capability: Capability) -> None:
        """Raise when the device type has no command for ``capability``."""

        if not self.profile.supports(capability):
            raise InvalidArgumentError(
                f"{self.config.device_type.value} {self.device_id!r} does not "
                f"support {capability.value}"
            )

    async def _async_send(self, frame: dict[str, Any]) -> None:
        """Send ``frame`` over the bound connection."""

        connection = self.connection
        if connection is None:
            raise NotConnectedError("No connection")
        await connection.async_send(frame)
