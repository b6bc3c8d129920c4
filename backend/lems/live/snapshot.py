"""
Snapshot loader for the field schedule page.

One call to /api/me identifies the user's event, then the event (with its
general schedule), teams, tables and matches are read in parallel. Either the
whole snapshot loads or the page redirects to login; there is no partial
rendering.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

import httpx
from pydantic import BaseModel, ValidationError

from lems.auth import AUTH_HEADER
from lems.live import API_URL
from lems.schemas import EventRead, MatchRead, TableRead, TeamRead, UserRead

logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"


class SnapshotLoadError(Exception):
    """The session or any of the snapshot reads failed."""


class FieldScheduleSnapshot(BaseModel):
    user: UserRead
    event: EventRead
    teams: List[TeamRead]
    tables: List[TableRead]
    matches: List[MatchRead]


@dataclass(frozen=True)
class Redirect:
    destination: str
    permanent: bool = False


def snapshot_requests(event_id: int) -> Dict[str, str]:
    return {
        "event": f"/api/events/{event_id}?with_schedule=true",
        "teams": f"/api/events/{event_id}/teams",
        "tables": f"/api/events/{event_id}/tables",
        "matches": f"/api/events/{event_id}/matches",
    }


async def _get_json(client: httpx.AsyncClient, path: str) -> Any:
    response = await client.get(path)
    response.raise_for_status()
    return response.json()


async def _read_all(client: httpx.AsyncClient, requests: Dict[str, str]) -> Dict[str, Any]:
    """Run the reads concurrently. The first failure cancels the reads still in flight and is re-raised."""
    tasks = {key: asyncio.ensure_future(_get_json(client, path)) for key, path in requests.items()}
    try:
        await asyncio.wait(tasks.values(), return_when=asyncio.FIRST_EXCEPTION)
    finally:
        pending = [task for task in tasks.values() if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.wait(pending)

    failures = [task.exception() for task in tasks.values() if not task.cancelled() and task.exception()]
    if failures:
        raise failures[0]
    return {key: task.result() for key, task in tasks.items()}


async def load_field_schedule_snapshot(client: httpx.AsyncClient) -> FieldScheduleSnapshot:
    """Read the full snapshot. Raises SnapshotLoadError on any failure."""
    try:
        user = UserRead.model_validate(await _get_json(client, "/api/me"))
        if user.event_id is None:
            raise SnapshotLoadError(f"User {user.id} is not assigned to an event")

        requests = snapshot_requests(user.event_id)
        data = await _read_all(client, requests)
        return FieldScheduleSnapshot(user=user, **data)
    except (httpx.HTTPError, ValidationError, ValueError) as e:
        raise SnapshotLoadError(str(e)) from e


async def load_page_props(client: httpx.AsyncClient) -> Union[FieldScheduleSnapshot, Redirect]:
    """Snapshot on success, otherwise a redirect to the login page."""
    try:
        return await load_field_schedule_snapshot(client)
    except SnapshotLoadError as e:
        logger.warning(f"Field schedule load failed, redirecting to login: {e}")
        return Redirect(destination=LOGIN_PATH, permanent=False)


def api_client(auth_token: str, base_url: Optional[str] = None, **kwargs: Any) -> httpx.AsyncClient:
    """AsyncClient carrying the session token, pointed at the LEMS API."""
    headers = {AUTH_HEADER: auth_token}
    return httpx.AsyncClient(base_url=base_url or API_URL, headers=headers, **kwargs)
