"""
Report endpoints. Any authenticated role may read reports for its own event.
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, ConfigDict
from sqlmodel import Session

from lems.auth import ensure_event_access, require_roles
from lems.crud import events as events_crud
from lems.crud import matches as matches_crud
from lems.crud import tables as tables_crud
from lems.crud import teams as teams_crud
from lems.database import get_session
from lems.models.user import LOCALIZED_ROLES, ROLE_TYPES, User
from lems.schemas import EventRead, MatchRead, MatchType, ScheduleEntry, TableRead, TeamRead
from lems.services.field_schedule import derive_round_schedules

router = APIRouter()


class RoundScheduleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    event_schedule: List[ScheduleEntry]
    round_type: MatchType
    round_number: int
    matches: List[MatchRead]
    tables: List[TableRead]
    teams: List[TeamRead]


class FieldScheduleReport(BaseModel):
    title: str
    back: str
    rounds: List[RoundScheduleResponse]


@router.get("/events/{event_id}/reports/field-schedule", response_model=FieldScheduleReport)
def get_field_schedule_report(
    event_id: int,
    show_general_schedule: bool = Query(True, description="Include referee entries of the general schedule"),
    user: User = Depends(require_roles(*ROLE_TYPES)),
    session: Session = Depends(get_session),
):
    """Per-round field schedule: practice rounds first, then ranking rounds"""
    ensure_event_access(user, event_id)

    event_row = events_crud.get_event(session, event_id)
    if not event_row:
        raise HTTPException(status_code=404, detail="Event not found")
    event = EventRead.model_validate(event_row)

    rounds = derive_round_schedules(
        matches=[MatchRead.model_validate(m) for m in matches_crud.get_event_matches(session, event_id)],
        schedule=event.schedule,
        teams=[TeamRead.model_validate(t) for t in teams_crud.get_event_teams(session, event_id)],
        tables=[TableRead.model_validate(t) for t in tables_crud.get_event_tables(session, event_id)],
        show_general_schedule=show_general_schedule,
    )

    role_name = LOCALIZED_ROLES.get(user.role, user.role)
    return FieldScheduleReport(
        title=f"{role_name} - Field Schedule | {event.name}",
        back=f"/event/{event_id}/reports",
        rounds=[RoundScheduleResponse.model_validate(r) for r in rounds],
    )
