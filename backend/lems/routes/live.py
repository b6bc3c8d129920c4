"""
Websocket endpoint for the per-event push channel.

Clients connect to /ws/events/{event_id}?rooms=field&rooms=pit-admin and then
only listen; the server pushes {"name", "data"} messages. Anything a client
sends is ignored apart from keeping the connection open.

The session token comes from the X-Auth-Token header, or from the token query
parameter for clients that cannot set headers on the upgrade request. Only
users of the event (or admins) may join.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query, WebSocket, WebSocketDisconnect
from sqlmodel import Session

from lems.auth import AUTH_HEADER, ensure_event_access, find_user
from lems.database import get_session
from lems.realtime.hub import hub
from lems.realtime.messages import ROOMS

logger = logging.getLogger(__name__)

router = APIRouter()

POLICY_VIOLATION = 1008


@router.websocket("/ws/events/{event_id}")
async def event_channel(
    websocket: WebSocket,
    event_id: int,
    rooms: List[str] = Query(default=[]),
    token: Optional[str] = Query(default=None),
    x_auth_token: Optional[str] = Header(default=None, alias=AUTH_HEADER),
    session: Session = Depends(get_session),
):
    user = find_user(session, x_auth_token or token)
    # The socket may stay open for hours; don't hold a connection for it
    session.close()
    if not user:
        logger.warning(f"Rejecting websocket for event {event_id}: not authenticated")
        await websocket.close(code=POLICY_VIOLATION)
        return
    try:
        ensure_event_access(user, event_id)
    except HTTPException:
        logger.warning(f"Rejecting websocket for event {event_id}: user {user.id} belongs to another event")
        await websocket.close(code=POLICY_VIOLATION)
        return

    unknown = [room for room in rooms if room not in ROOMS]
    if unknown:
        logger.warning(f"Rejecting websocket for event {event_id}: unknown rooms {unknown}")
        await websocket.close(code=POLICY_VIOLATION)
        return

    await websocket.accept()
    hub.join(event_id, websocket, rooms)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        hub.leave(event_id, websocket)
        logger.info(f"Websocket left event {event_id}")
