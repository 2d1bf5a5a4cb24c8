"""Tests for the accessory adapter."""

from __future__ import annotations

import json
import logging

import pytest

from custom_components.pilight_ws.accessory import PilightAccessory
from custom_components.pilight_ws.connection import ConnectionEvent
from custom_components.pilight_ws.exceptions import (
    ConversionError,
    DeviceNotFoundError,
    InvalidArgumentError,
    NotConnectedError,
)


def _accessory(make_config, connection, **data) -> PilightAccessory:
    return PilightAccessory(make_config(**data), connection)


@pytest.mark.asyncio
async def test_start_subscribes_and_connects(make_config, fake_connection) -> None:
    """Starting an accessory requests values and opens the connection."""

    fake_connection.connected = False
    accessory = _accessory(make_config, fake_connection, device="lamp")

    await accessory.async_start()

    assert fake_connection.connect_calls == 1
    assert all(fake_connection.listeners[event] for event in ConnectionEvent)
    assert fake_connection.sent == []

    fake_connection.connected = True
    await fake_connection.emit(ConnectionEvent.READY)

    assert fake_connection.sent == [{"action": "request values"}]


@pytest.mark.asyncio
async def test_start_on_open_shared_connection_requests_values(
    make_config, fake_connection
) -> None:
    """Joining an already open connection requests values immediately."""

    accessory = _accessory(make_config, fake_connection, shared_ws=True)

    await accessory.async_start()

    assert fake_connection.sent == [{"action": "request values"}]


@pytest.mark.asyncio
async def test_start_without_connection_fails(make_config) -> None:
    """An accessory needs a connection to start."""

    accessory = _accessory(make_config, None)

    with pytest.raises(NotConnectedError):
        await accessory.async_start()


@pytest.mark.asyncio
async def test_stop_unsubscribes(make_config, fake_connection) -> None:
    """Stopping detaches every connection listener."""

    accessory = _accessory(make_config, fake_connection)
    await accessory.async_start()

    await accessory.async_stop()

    assert not any(fake_connection.listeners[event] for event in ConnectionEvent)


@pytest.mark.asyncio
async def test_frames_update_state_and_notify(make_config, fake_connection) -> None:
    """Frames routed by the connection reach the state and the listeners."""

    accessory = _accessory(
        make_config, fake_connection, device="dimmer", type="Dimmer"
    )
    changes = []
    accessory.add_listener(changes.append)
    await accessory.async_start()

    await fake_connection.emit(
        ConnectionEvent.FRAME,
        [{"devices": ["dimmer"], "values": {"state": "on", "dimlevel": 8}}],
    )
    await fake_connection.emit(
        ConnectionEvent.FRAME, {"devices": ["other"], "values": {"state": "off"}}
    )
    await fake_connection.emit(
        ConnectionEvent.FRAME, {"devices": ["dimmer"], "values": {"state": "on"}}
    )

    assert accessory.populated
    assert accessory.get_power() is True
    assert accessory.get_dim_level() == 50
    assert len(changes) == 1
    assert dict(changes[0].values) == {"power": True, "dim_level": 8}


def test_handle_frame_logs_unrecognized_frames(
    make_config, fake_connection, caplog: pytest.LogCaptureFixture
) -> None:
    """Frames of unknown shape are dropped without touching the state."""

    accessory = _accessory(make_config, fake_connection)

    with caplog.at_level(logging.DEBUG):
        assert accessory.handle_frame({"status": "success"}) is None

    assert "Ignoring unrecognized frame" in caplog.text
    assert accessory.state.as_dict() == {}


@pytest.mark.asyncio
async def test_decode_errors_are_logged_as_warnings(
    make_config, fake_connection, caplog: pytest.LogCaptureFixture
) -> None:
    """Undecodable frames are reported at warning level."""

    accessory = _accessory(make_config, fake_connection)
    await accessory.async_start()

    try:
        json.loads("{not json")
    except json.JSONDecodeError as exc:
        error = exc

    with caplog.at_level(logging.WARNING):
        await fake_connection.emit(ConnectionEvent.FRAME_ERROR, error)

    assert "Cannot parse message" in caplog.text


def test_getters_raise_until_reported(make_config, fake_connection) -> None:
    """Values that were never reported raise ``DeviceNotFoundError``."""

    accessory = _accessory(make_config, fake_connection, type="Dimmer")

    with pytest.raises(DeviceNotFoundError):
        accessory.get_power()
    with pytest.raises(DeviceNotFoundError):
        accessory.get_dim_level()
    with pytest.raises(DeviceNotFoundError):
        accessory.get_temperature()


def test_zero_dim_level_reads_as_unknown(make_config, fake_connection) -> None:
    """A reported dim level of zero has no brightness."""

    accessory = _accessory(make_config, fake_connection, device="d", type="Dimmer")
    accessory.handle_frame({"devices": ["d"], "values": {"dimlevel": 0}})

    with pytest.raises(DeviceNotFoundError):
        accessory.get_dim_level()


def test_dim_level_above_range_fails_conversion(make_config, fake_connection) -> None:
    """A dim level beyond the configured maximum cannot be converted."""

    accessory = _accessory(
        make_config, fake_connection, device="d", type="Dimmer", dimlevel_max=15
    )
    accessory.handle_frame({"devices": ["d"], "values": {"dimlevel": 16}})

    with pytest.raises(ConversionError):
        accessory.get_dim_level()


def test_temperature_getter(make_config, fake_connection) -> None:
    """Temperature sensors report the last temperature."""

    accessory = _accessory(
        make_config, fake_connection, device="t", type="TemperatureSensor"
    )
    accessory.handle_frame([{"devices": ["t"], "values": {"temperature": 22.1}}])

    assert accessory.get_temperature() == 22.1


@pytest.mark.asyncio
async def test_set_power_sends_control_frame(make_config, fake_connection) -> None:
    """Power commands are forwarded to the connection."""

    accessory = _accessory(make_config, fake_connection, device="lamp")

    await accessory.async_set_power(True)
    await accessory.async_set_power(False)

    assert fake_connection.sent == [
        {"action": "control", "code": {"device": "lamp", "state": "on"}},
        {"action": "control", "code": {"device": "lamp", "state": "off"}},
    ]


@pytest.mark.asyncio
async def test_set_power_rejects_non_boolean(make_config, fake_connection) -> None:
    """Only booleans are power states."""

    accessory = _accessory(make_config, fake_connection)

    with pytest.raises(InvalidArgumentError):
        await accessory.async_set_power("on")  # type: ignore[arg-type]
    assert fake_connection.sent == []


@pytest.mark.asyncio
async def test_temperature_sensor_rejects_power_commands(
    make_config, fake_connection
) -> None:
    """Sensors have no power state to switch."""

    accessory = _accessory(
        make_config, fake_connection, device="sensor1", type="TemperatureSensor"
    )

    with pytest.raises(InvalidArgumentError):
        await accessory.async_set_power(True)
    with pytest.raises(InvalidArgumentError):
        await accessory.async_set_dim_level(50)
    assert fake_connection.sent == []


@pytest.mark.asyncio
@pytest.mark.parametrize("device_type", ["Switch", "Lamp"])
async def test_on_off_devices_reject_dim_commands(
    make_config, fake_connection, device_type
) -> None:
    """Only dimmers accept a dim level."""

    accessory = _accessory(make_config, fake_connection, device="sw", type=device_type)

    with pytest.raises(InvalidArgumentError):
        await accessory.async_set_dim_level(50)
    await accessory.async_set_power(True)

    assert fake_connection.sent == [
        {"action": "control", "code": {"device": "sw", "state": "on"}}
    ]


@pytest.mark.asyncio
async def test_commands_require_connection(make_config, fake_connection) -> None:
    """Commands fail before validation while disconnected."""

    fake_connection.connected = False
    accessory = _accessory(make_config, fake_connection)

    with pytest.raises(NotConnectedError):
        await accessory.async_set_power(True)
    with pytest.raises(NotConnectedError):
        await accessory.async_set_dim_level("abc")


@pytest.mark.asyncio
async def test_set_dim_level_converts_brightness(make_config, fake_connection) -> None:
    """Brightness percentages are sent as native dim levels."""

    accessory = _accessory(make_config, fake_connection, device="d", type="Dimmer")

    await accessory.async_set_dim_level(100)
    await accessory.async_set_dim_level(0)

    assert fake_connection.sent == [
        {"action": "control", "code": {"device": "d", "values": {"dimlevel": 16}}}
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize("brightness", [150, "abc"])
async def test_set_dim_level_rejects_invalid_values(
    make_config, fake_connection, brightness
) -> None:
    """Out of range or non-numeric brightness is rejected."""

    accessory = _accessory(make_config, fake_connection, type="Dimmer")

    with pytest.raises(InvalidArgumentError):
        await accessory.async_set_dim_level(brightness)
    assert fake_connection.sent == []


@pytest.mark.asyncio
async def test_ready_on_closed_connection_only_logs(
    make_config, fake_connection, caplog: pytest.LogCaptureFixture
) -> None:
    """Failing to request values is logged, not raised."""

    fake_connection.connected = False
    accessory = _accessory(make_config, fake_connection)
    await accessory.async_start()

    with caplog.at_level(logging.WARNING):
        await fake_connection.emit(ConnectionEvent.READY)

    assert "Could not request values" in caplog.text


def test_removed_listener_is_not_notified(make_config, fake_connection) -> None:
    """Listeners can be removed, and removing twice is harmless."""

    accessory = _accessory(make_config, fake_connection, device="lamp")
    changes = []
    remove = accessory.add_listener(changes.append)

    remove()
    remove()
    accessory.handle_frame({"devices": ["lamp"], "values": {"state": "on"}})

    assert changes == []
