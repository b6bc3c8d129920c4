"""
Live reconciler: keeps the local team roster in step with push updates.

Updates arrive as {"name": <category>, "data": <entity>} messages. Only
categories in the allow-list are applied. An applied update replaces the
local team with the same id, in place; an id we do not hold is dropped,
never inserted. Updates are applied one at a time in arrival order.
"""

import logging
from enum import Enum
from typing import Any, Callable, Iterable, List, Optional, Sequence, TypeVar

from pydantic import ValidationError

from lems.realtime.messages import TEAM_REGISTERED, TeamRegistered, live_message_adapter
from lems.schemas import TeamRead

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_CATEGORIES = (TEAM_REGISTERED,)


class ConnectionStatus(str, Enum):
    connecting = "connecting"
    connected = "connected"
    disconnected = "disconnected"


def replace_by_id(items: Sequence[T], entity: T) -> List[T]:
    """Copy of *items* with the element sharing entity's id swapped for entity."""
    return [entity if item.id == entity.id else item for item in items]


class LiveReconciler:
    def __init__(
        self,
        event_id: int,
        teams: Iterable[TeamRead],
        categories: Sequence[str] = DEFAULT_CATEGORIES,
        on_change: Optional[Callable[[], None]] = None,
    ):
        self.event_id = event_id
        self.categories = tuple(categories)
        self.on_change = on_change
        self.status = ConnectionStatus.connecting
        self._teams: List[TeamRead] = list(teams)

    @property
    def teams(self) -> List[TeamRead]:
        return list(self._teams)

    def set_status(self, status: ConnectionStatus) -> None:
        if status != self.status:
            logger.info(f"Event {self.event_id} channel {self.status.value} -> {status.value}")
        self.status = status

    def apply(self, message: Any) -> bool:
        """
        Apply one raw message. Returns True when the roster was updated.

        Unknown or disallowed categories, malformed payloads and unknown team
        ids are no-ops.
        """
        try:
            update = live_message_adapter.validate_python(message)
        except ValidationError:
            logger.debug(f"Ignoring unrecognised live message on event {self.event_id}")
            return False

        if update.name not in self.categories:
            return False

        if isinstance(update, TeamRegistered):
            return self.handle_team_registered(update.data)
        return False

    def handle_team_registered(self, team: TeamRead) -> bool:
        if not any(t.id == team.id for t in self._teams):
            logger.debug(f"Ignoring update for unknown team {team.id}")
            return False

        self._teams = replace_by_id(self._teams, team)
        if self.on_change is not None:
            self.on_change()
        return True
