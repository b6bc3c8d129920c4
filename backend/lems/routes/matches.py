from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, field_validator
from sqlmodel import Session

from lems.crud import events as events_crud
from lems.crud import matches as matches_crud
from lems.crud import tables as tables_crud
from lems.crud import teams as teams_crud
from lems.database import get_session
from lems.models.robot_game_match import RobotGameMatch
from lems.schemas import MatchRead, MatchType

router = APIRouter()


class MatchCreate(BaseModel):
    match_type: MatchType
    round_number: int
    number: int
    table_id: int
    team_id: int
    scheduled_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    @field_validator("round_number")
    @classmethod
    def validate_round_number(cls, v):
        if v < 1:
            raise ValueError("round_number must be >= 1")
        return v


@router.get("/events/{event_id}/matches", response_model=List[MatchRead])
def get_matches(event_id: int, session: Session = Depends(get_session)):
    """Get all robot-game matches for an event"""
    if not events_crud.get_event(session, event_id):
        raise HTTPException(status_code=404, detail="Event not found")
    return matches_crud.get_event_matches(session, event_id)


@router.post("/events/{event_id}/matches", response_model=MatchRead, status_code=201)
def create_match(event_id: int, request: MatchCreate, session: Session = Depends(get_session)):
    """
    Create a match. Round and table assignment come from the caller as-is;
    the table and team must belong to the same event.
    """
    if not events_crud.get_event(session, event_id):
        raise HTTPException(status_code=404, detail="Event not found")
    if not tables_crud.get_event_table(session, event_id, request.table_id):
        raise HTTPException(status_code=400, detail="Table does not belong to this event")
    if not teams_crud.get_event_team(session, event_id, request.team_id):
        raise HTTPException(status_code=400, detail="Team does not belong to this event")

    match = RobotGameMatch(event_id=event_id, **request.model_dump())
    return matches_crud.add_match(session, match)
