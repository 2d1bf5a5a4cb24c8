"""Pytest configuration for the pilight websocket integration tests."""

from __future__ import annotations

import asyncio
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

root_path = Path(__file__).resolve().parent.parent
if str(root_path) not in sys.path:
    sys.path.insert(0, str(root_path))

from custom_components.pilight_ws.config import DeviceConfig  # noqa: E402
from custom_components.pilight_ws.connection import ConnectionEvent  # noqa: E402
from custom_components.pilight_ws.exceptions import NotConnectedError  # noqa: E402


class FakeConnection:
    """In-memory stand-in for ``PilightConnection``."""

    def __init__(self, *, connected: bool = True) -> None:
        """Initialise listener and outbound frame storage."""

        self.address = "ws://localhost:5001/"
        self.connected = connected
        self.connect_calls = 0
        self.sent: list[dict[str, Any]] = []
        self.listeners: dict[ConnectionEvent, list[Callable[..., Any]]] = {
            event: [] for event in ConnectionEvent
        }

    def subscribe(
        self, event: ConnectionEvent, callback: Callable[..., Any]
    ) -> Callable[[], None]:
        """Record ``callback`` for ``event``."""

        self.listeners[event].append(callback)
        return lambda: self.listeners[event].remove(callback)

    async def async_connect(self) -> None:
        """Count connection attempts."""

        self.connect_calls += 1

    async def async_send(self, frame: dict[str, Any]) -> None:
        """Record ``frame`` or fail like a closed websocket."""

        if not self.connected:
            raise NotConnectedError("closed")
        self.sent.append(frame)

    async def emit(self, event: ConnectionEvent, *args: Any) -> None:
        """Invoke listeners for ``event`` the way the real connection does."""

        for callback in list(self.listeners[event]):
            result = callback(*args)
            if asyncio.iscoroutine(result):
                await result


@pytest.fixture
def fake_connection() -> FakeConnection:
    """Return a connected fake connection."""

    return FakeConnection()


@pytest.fixture
def make_config() -> Callable[..., DeviceConfig]:
    """Return a factory for device configurations."""

    def _make(**data: Any) -> DeviceConfig:
        return DeviceConfig.from_mapping(data)

    return _make


def pytest_configure(config: pytest.Config) -> None:
    """Register markers used throughout the test suite."""

    config.addinivalue_line(
        "markers", "asyncio: mark coroutine tests to execute via asyncio loop"
    )


def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> bool | None:
    """Execute coroutine tests within a dedicated event loop."""

    test_function = pyfuncitem.obj
    if not asyncio.iscoroutinefunction(test_function):
        return None

    funcargs = pyfuncitem.funcargs
    testargs = {
        name: funcargs[name] for name in pyfuncitem._fixtureinfo.argnames
    }
    loop = asyncio.new_event_loop()
    try:
        asyncio.set_event_loop(loop)
        loop.run_until_complete(test_function(**testargs))
    finally:
        asyncio.set_event_loop(None)
        loop.close()
    return True
