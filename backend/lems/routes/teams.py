"""
Team Management API Routes
Provides CRUD for the teams of an event and pit registration.
"""

from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from lems.crud import events as events_crud
from lems.crud import teams as teams_crud
from lems.database import get_session
from lems.models.team import Team
from lems.realtime.hub import RoomHub, get_hub
from lems.realtime.messages import TEAM_REGISTERED
from lems.schemas import TeamRead

router = APIRouter()


# ============================================================================
# Request Models
# ============================================================================


class TeamCreateRequest(BaseModel):
    number: int
    name: str
    affiliation_name: Optional[str] = None
    affiliation_city: Optional[str] = None


class TeamUpdateRequest(BaseModel):
    name: Optional[str] = None
    affiliation_name: Optional[str] = None
    affiliation_city: Optional[str] = None
    registered: Optional[bool] = None


def _require_event(session: Session, event_id: int) -> None:
    if not events_crud.get_event(session, event_id):
        raise HTTPException(status_code=404, detail="Event not found")


def _require_team(session: Session, event_id: int, team_id: int) -> Team:
    team = teams_crud.get_event_team(session, event_id, team_id)
    if not team:
        raise HTTPException(status_code=404, detail="Team not found")
    return team


# ============================================================================
# Team CRUD Endpoints
# ============================================================================


@router.get("/events/{event_id}/teams", response_model=List[TeamRead])
def get_teams(event_id: int, session: Session = Depends(get_session)):
    """Get all teams for an event, ordered by team number"""
    _require_event(session, event_id)
    return teams_crud.get_event_teams(session, event_id)


@router.post("/events/{event_id}/teams", response_model=TeamRead, status_code=201)
def create_team(event_id: int, request: TeamCreateRequest, session: Session = Depends(get_session)):
    """
    Create a new team for an event.

    Constraints:
    - (event_id, number) must be unique
    """
    _require_event(session, event_id)

    team = Team(event_id=event_id, **request.model_dump())
    try:
        return teams_crud.save_team(session, team)
    except IntegrityError:
        session.rollback()
        raise HTTPException(
            status_code=409, detail=f"Team with number {request.number} already exists for this event"
        )


@router.patch("/events/{event_id}/teams/{team_id}", response_model=TeamRead)
def update_team(event_id: int, team_id: int, request: TeamUpdateRequest, session: Session = Depends(get_session)):
    """
    Update a team's attributes. The team id never changes.
    """
    team = _require_team(session, event_id, team_id)

    for field, value in request.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(team, field, value)

    return teams_crud.save_team(session, team)


# ============================================================================
# Pit Registration
# ============================================================================


@router.post("/events/{event_id}/teams/{team_id}/register", response_model=TeamRead)
def register_team(
    event_id: int,
    team_id: int,
    background_tasks: BackgroundTasks,
    session: Session = Depends(get_session),
    hub: RoomHub = Depends(get_hub),
):
    """
    Mark a team as arrived and push the full updated team to the pit-admin room.

    Registering an already registered team is allowed and re-sends the update.
    """
    team = _require_team(session, event_id, team_id)
    team.registered = True
    team = teams_crud.save_team(session, team)

    payload = TeamRead.model_validate(team)
    background_tasks.add_task(hub.broadcast, event_id, TEAM_REGISTERED, payload, "pit-admin")
    return payload
