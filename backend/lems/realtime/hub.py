"""
In-process room hub for websocket clients.

Each connection belongs to one event and to a set of rooms inside it.
Broadcasts go to every connection of the event, or only to those that
joined the target room. A socket that fails to receive is dropped.
"""

import logging
from typing import Any, Dict, FrozenSet, Iterable, Optional

from fastapi import WebSocket

from lems.realtime.messages import encode_message

logger = logging.getLogger(__name__)


class RoomHub:
    def __init__(self) -> None:
        self._connections: Dict[int, Dict[WebSocket, FrozenSet[str]]] = {}

    def join(self, event_id: int, websocket: WebSocket, rooms: Iterable[str] = ()) -> None:
        joined = frozenset(rooms)
        self._connections.setdefault(event_id, {})[websocket] = joined
        logger.info(f"Websocket joined event {event_id} rooms={sorted(joined)}")

    def leave(self, event_id: int, websocket: WebSocket) -> None:
        members = self._connections.get(event_id)
        if not members:
            return
        members.pop(websocket, None)
        if not members:
            del self._connections[event_id]

    def connection_count(self, event_id: int) -> int:
        return len(self._connections.get(event_id, {}))

    async def broadcast(self, event_id: int, name: str, data: Any, room: Optional[str] = None) -> int:
        """Send one named update to the event. Returns the number of sockets reached."""
        message = encode_message(name, data)
        delivered = 0
        for websocket, rooms in list(self._connections.get(event_id, {}).items()):
            if room is not None and room not in rooms:
                continue
            try:
                await websocket.send_json(message)
                delivered += 1
            except Exception as e:
                logger.warning(f"Dropping websocket on event {event_id}: {e}")
                self.leave(event_id, websocket)
        logger.info(f"Broadcast {name} to event {event_id} room={room} ({delivered} sockets)")
        return delivered


hub = RoomHub()


def get_hub() -> RoomHub:
    return hub
