"""Websocket connection to a pilight daemon."""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
from collections.abc import Callable
from enum import Enum
from typing import Any

import aiohttp

from .exceptions import NotConnectedError

_LOGGER = logging.getLogger(__name__)

_DEFAULT_RECONNECT_DELAY = 1.0
_DEFAULT_MAX_RECONNECT_DELAY = 60.0
_DEFAULT_HEARTBEAT = 30.0


class ConnectionState(str, Enum):
    """Lifecycle of the websocket."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"


class ConnectionEvent(str, Enum):
    """Events emitted to connection subscribers."""

    READY = "ready"
    ERROR = "error"
    FRAME = "frame"
    FRAME_ERROR = "frame_error"


Listener = Callable[..., Any]


class PilightConnection:
    """Persistent websocket client that reconnects until stopped.

    Subscribers are invoked in order on the event loop task that reads the
    socket; coroutine listeners are awaited before the next frame is read.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        address: str,
        *,
        reconnect_delay: float = _DEFAULT_RECONNECT_DELAY,
        max_reconnect_delay: float = _DEFAULT_MAX_RECONNECT_DELAY,
        heartbeat: float | None = _DEFAULT_HEARTBEAT,
    ) -> None:
        """Store connection settings; nothing is opened until connect."""

        self._session = session
        self.address = address
        self._reconnect_delay = reconnect_delay
        self._max_reconnect_delay = max_reconnect_delay
        self._heartbeat = heartbeat
        self._listeners: dict[ConnectionEvent, list[Listener]] = {
            event: [] for event in ConnectionEvent
        }
        self._ws: aiohttp.ClientWebSocketResponse | None = None
        self._task: asyncio.Task[None] | None = None
        self._stopping = False
        self._state = ConnectionState.DISCONNECTED

    @property
    def state(self) -> ConnectionState:
        """Return the current connection state."""

        return self._state

    @property
    def connected(self) -> bool:
        """Return True when frames can be sent."""

        return (
            self._state is ConnectionState.CONNECTED
            and self._ws is not None
            and not self._ws.closed
        )

    def subscribe(self, event: ConnectionEvent, callback: Listener) -> Callable[[], None]:
        """Register ``callback`` for ``event`` and return an unsubscribe callable."""

        listeners = self._listeners[ConnectionEvent(event)]
        listeners.append(callback)

        def _unsubscribe() -> None:
            with contextlib.suppress(ValueError):
                listeners.remove(callback)

        return _unsubscribe

    async def async_connect(self) -> None:
        """Start the background task maintaining the websocket."""

        if self._task is not None and not self._task.done():
            return
        self._stopping = False
        self._task = asyncio.create_task(self._async_run())

    async def async_disconnect(self) -> None:
        """Close the websocket and stop reconnecting."""

        self._stopping = True
        ws = self._ws
        if ws is not None and not ws.closed:
            await ws.close()
        task = self._task
        self._task = None
        if task is not None and not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._ws = None
        self._state = ConnectionState.DISCONNECTED

    async def async_send(self, frame: dict[str, Any]) -> None:
        """Send ``frame`` as JSON without waiting for an acknowledgement."""

        ws = self._ws
        if not self.connected or ws is None:
            raise NotConnectedError(f"Not connected to {self.address}")
        try:
            await ws.send_str(json.dumps(frame))
        except (aiohttp.ClientError, ConnectionError) as exc:
            raise NotConnectedError(f"Sending to {self.address} failed: {exc}") from exc

    async def _async_run(self) -> None:
        """Connect, read and reconnect with capped exponential backoff."""

        delay = self._reconnect_delay
        while not self._stopping:
            self._state = ConnectionState.CONNECTING
            try:
                async with self._session.ws_connect(
                    self.address, heartbeat=self._heartbeat
                ) as ws:
                    self._ws = ws
                    self._state = ConnectionState.CONNECTED
                    delay = self._reconnect_delay
                    _LOGGER.debug("Connected to %s", self.address)
                    await self._emit(ConnectionEvent.READY)
                    await self._async_receive(ws)
            except (aiohttp.ClientError, OSError, asyncio.TimeoutError) as exc:
                _LOGGER.warning("Connection error on %s: %s", self.address, exc)
                await self._emit(ConnectionEvent.ERROR, exc)
            finally:
                self._ws = None
                self._state = ConnectionState.DISCONNECTED
            if self._stopping:
                break
            _LOGGER.debug("Reconnecting to %s in %.1fs", self.address, delay)
            await asyncio.sleep(delay)
            delay = min(delay * 2, self._max_reconnect_delay)

    async def _async_receive(self, ws: aiohttp.ClientWebSocketResponse) -> None:
        """Dispatch every text frame until the socket closes."""

        async for message in ws:
            if message.type is aiohttp.WSMsgType.TEXT:
                await self._handle_text(message.data)
            elif message.type is aiohttp.WSMsgType.ERROR:
                error = ws.exception() or aiohttp.ClientError("websocket error")
                _LOGGER.warning("Websocket error on %s: %s", self.address, error)
                await self._emit(ConnectionEvent.ERROR, error)
                break

    async def _handle_text(self, text: str) -> None:
        """Decode one frame and hand it to subscribers."""

        try:
            decoded = json.loads(text)
        except json.JSONDecodeError as exc:
            await self._emit(ConnectionEvent.FRAME_ERROR, exc)
            return
        await self._emit(ConnectionEvent.FRAME, decoded)

    async def _emit(self, event: ConnectionEvent, *args: Any) -> None:
        """Invoke listeners for ``event``; a failing listener is only logged."""

        for callback in list(self._listeners[event]):
            try:
                result = callback(*args)
                if asyncio.iscoroutine(result):
                    await result
            except Exception:
                _LOGGER.exception("Error in %s listener for %s", event.value, self.address)


class ConnectionManager:
    """Hand out private or shared connections to pilight daemons."""

    def __init__(self, session: aiohttp.ClientSession) -> None:
        """Bind the manager to the HTTP session used for websockets."""

        self._session = session
        self._shared: dict[str, PilightConnection] = {}
        self._refs: dict[str, int] = {}

    def simple(self, address: str) -> PilightConnection:
        """Return a new connection used by a single binding."""

        return PilightConnection(self._session, address)

    def shared(self, address: str) -> PilightConnection:
        """Return the connection shared by every binding of ``address``."""

        connection = self._shared.get(address)
        if connection is None:
            connection = PilightConnection(self._session, address)
            self._shared[address] = connection
            self._refs[address] = 0
        self._refs[address] += 1
        return connection

    def shared_count(self, address: str) -> int:
        """Return how many bindings currently use the shared connection."""

        return self._refs.get(address, 0)

    async def async_release(self, connection: PilightConnection) -> None:
        """Drop one user of ``connection`` and close it once unused."""

        address = connection.address
        if self._shared.get(address) is connection:
            self._refs[address] -= 1
            if self._refs[address] > 0:
                return
            del self._shared[address]
            del self._refs[address]
        await connection.async_disconnect()
