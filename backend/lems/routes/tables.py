from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, field_validator
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from lems.crud import events as events_crud
from lems.crud import tables as tables_crud
from lems.database import get_session
from lems.models.robot_game_table import RobotGameTable
from lems.schemas import TableRead

router = APIRouter()


class TableCreate(BaseModel):
    name: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError("name cannot be empty")
        return v.strip()


@router.get("/events/{event_id}/tables", response_model=List[TableRead])
def get_tables(event_id: int, session: Session = Depends(get_session)):
    """Get all robot-game tables for an event"""
    if not events_crud.get_event(session, event_id):
        raise HTTPException(status_code=404, detail="Event not found")
    return tables_crud.get_event_tables(session, event_id)


@router.post("/events/{event_id}/tables", response_model=TableRead, status_code=201)
def create_table(event_id: int, request: TableCreate, session: Session = Depends(get_session)):
    """Create a robot-game table"""
    if not events_crud.get_event(session, event_id):
        raise HTTPException(status_code=404, detail="Event not found")

    try:
        return tables_crud.add_table(session, RobotGameTable(event_id=event_id, name=request.name))
    except IntegrityError:
        session.rollback()
        raise HTTPException(status_code=409, detail=f"Table '{request.name}' already exists for this event")
