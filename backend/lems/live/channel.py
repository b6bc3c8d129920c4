"""
Websocket transport for the live reconciler.

Connects to the event's push channel, feeds every inbound message to the
reconciler and mirrors the connection lifecycle into its status. Reconnects
are handled by websockets.connect's retry iterator.
"""

import asyncio
import json
import logging
from typing import Any, Callable, Optional, Sequence
from urllib.parse import urlencode

import websockets
from websockets.exceptions import ConnectionClosed

from lems.live import WS_URL
from lems.live.reconciler import ConnectionStatus, LiveReconciler

logger = logging.getLogger(__name__)

DEFAULT_ROOMS = ("pit-admin",)


def channel_url(
    event_id: int, rooms: Sequence[str], base_url: Optional[str] = None, auth_token: Optional[str] = None
) -> str:
    params = [("rooms", room) for room in rooms]
    if auth_token:
        params.append(("token", auth_token))
    query = urlencode(params)
    url = f"{(base_url or WS_URL).rstrip('/')}/ws/events/{event_id}"
    return f"{url}?{query}" if query else url


class LiveChannel:
    def __init__(
        self,
        reconciler: LiveReconciler,
        rooms: Sequence[str] = DEFAULT_ROOMS,
        base_url: Optional[str] = None,
        connect: Callable[[str], Any] = websockets.connect,
        auth_token: Optional[str] = None,
    ):
        self.reconciler = reconciler
        self.url = channel_url(reconciler.event_id, rooms, base_url, auth_token)
        self._connect = connect
        self._websocket = None
        self._task: Optional[asyncio.Task] = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def handle_raw(self, raw: Any) -> bool:
        if self._closed:
            return False
        try:
            message = json.loads(raw)
        except (TypeError, ValueError):
            logger.debug(f"Ignoring non-JSON frame on event {self.reconciler.event_id}")
            return False
        return self.reconciler.apply(message)

    async def run(self) -> None:
        """Consume the channel until close() is called."""
        self._task = asyncio.current_task()
        self.reconciler.set_status(ConnectionStatus.connecting)
        try:
            await self._consume()
        except asyncio.CancelledError:
            if not self._closed:
                raise
        finally:
            self._task = None
            self._websocket = None
            self.reconciler.set_status(ConnectionStatus.disconnected)

    async def _consume(self) -> None:
        async for websocket in self._connect(self.url):
            if self._closed:
                await websocket.close()
                break
            self._websocket = websocket
            self.reconciler.set_status(ConnectionStatus.connected)
            try:
                async for raw in websocket:
                    self.handle_raw(raw)
            except ConnectionClosed as e:
                logger.warning(f"Event {self.reconciler.event_id} channel closed: {e}")
            self.reconciler.set_status(ConnectionStatus.disconnected)
            if self._closed:
                break

    async def close(self) -> None:
        """Tear down the subscription. No update is applied after this returns."""
        self._closed = True
        self.reconciler.on_change = None
        if self._websocket is not None:
            await self._websocket.close()
        # Also stops a run() that is waiting between reconnect attempts
        if self._task is not None and self._task is not asyncio.current_task():
            self._task.cancel()
        self.reconciler.set_status(ConnectionStatus.disconnected)
