"""
Field schedule page: snapshot + live roster + per-round derivation.

The page owns the reconciler; rounds() is recomputed from the current
state on every call and on_render fires after each applied update.
open_field_schedule() mounts a page: it loads the snapshot, then keeps the
page subscribed to the event's push channel until close().
"""

import asyncio
from typing import Any, Callable, List, Optional, Sequence, Union

import websockets

from lems.live.channel import DEFAULT_ROOMS, LiveChannel
from lems.live.reconciler import DEFAULT_CATEGORIES, ConnectionStatus, LiveReconciler
from lems.live.snapshot import FieldScheduleSnapshot, Redirect, api_client, load_page_props
from lems.models.user import LOCALIZED_ROLES
from lems.services.field_schedule import RoundSchedule, derive_round_schedules


class FieldSchedulePage:
    def __init__(
        self,
        snapshot: FieldScheduleSnapshot,
        show_general_schedule: bool = True,
        on_render: Optional[Callable[[List[RoundSchedule]], None]] = None,
    ):
        self.snapshot = snapshot
        self.show_general_schedule = show_general_schedule
        self.on_render = on_render
        self.reconciler = LiveReconciler(
            snapshot.event.id, snapshot.teams, categories=DEFAULT_CATEGORIES, on_change=self._changed
        )

    @property
    def teams(self):
        return self.reconciler.teams

    @property
    def connection_status(self) -> ConnectionStatus:
        return self.reconciler.status

    @property
    def title(self) -> str:
        role = self.snapshot.user.role
        role_name = LOCALIZED_ROLES.get(role, role)
        return f"{role_name} - Field Schedule | {self.snapshot.event.name}"

    @property
    def back(self) -> str:
        return f"/event/{self.snapshot.event.id}/reports"

    @property
    def error(self) -> bool:
        return self.connection_status == ConnectionStatus.disconnected

    @property
    def back_disabled(self) -> bool:
        return self.connection_status != ConnectionStatus.connecting

    def rounds(self) -> List[RoundSchedule]:
        return derive_round_schedules(
            matches=self.snapshot.matches,
            schedule=self.snapshot.event.schedule,
            teams=self.reconciler.teams,
            tables=self.snapshot.tables,
            show_general_schedule=self.show_general_schedule,
        )

    def toggle_general_schedule(self) -> None:
        self.show_general_schedule = not self.show_general_schedule
        self._changed()

    def _changed(self) -> None:
        if self.on_render is not None:
            self.on_render(self.rounds())


class LiveFieldSchedule:
    """A mounted page and the channel feeding it."""

    def __init__(self, page: FieldSchedulePage, channel: LiveChannel):
        self.page = page
        self.channel = channel
        self.task: Optional[asyncio.Task] = None

    def start(self) -> asyncio.Task:
        if self.task is None:
            self.task = asyncio.create_task(self.channel.run())
        return self.task

    async def close(self) -> None:
        await self.channel.close()
        if self.task is not None:
            await self.task


async def open_field_schedule(
    auth_token: str,
    api_url: Optional[str] = None,
    ws_url: Optional[str] = None,
    rooms: Sequence[str] = DEFAULT_ROOMS,
    connect: Callable[[str], Any] = websockets.connect,
    on_render: Optional[Callable[[List[RoundSchedule]], None]] = None,
    **client_kwargs: Any,
) -> Union[LiveFieldSchedule, Redirect]:
    """
    Load the page for the token's user and subscribe it to live updates.

    Returns the login redirect when the snapshot cannot be loaded; no channel
    is opened in that case.
    """
    async with api_client(auth_token, api_url, **client_kwargs) as client:
        props = await load_page_props(client)
    if isinstance(props, Redirect):
        return props

    page = FieldSchedulePage(props, on_render=on_render)
    channel = LiveChannel(page.reconciler, rooms, ws_url, connect, auth_token=auth_token)
    mounted = LiveFieldSchedule(page, channel)
    mounted.start()
    return mounted
