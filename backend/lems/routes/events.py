from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, field_validator
from sqlmodel import Session

from lems.crud import events as events_crud
from lems.database import get_session
from lems.models.event import Event
from lems.schemas import EventRead, ScheduleEntry

router = APIRouter()


class EventCreate(BaseModel):
    name: str
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    color: Optional[str] = None
    schedule: Optional[List[ScheduleEntry]] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError("name cannot be empty")
        return v.strip()


class EventUpdate(BaseModel):
    name: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    color: Optional[str] = None
    schedule: Optional[List[ScheduleEntry]] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if v is not None and (not v or not v.strip()):
            raise ValueError("name cannot be empty")
        return v.strip() if v else v


def _dump_schedule(schedule: List[ScheduleEntry]) -> List[dict]:
    return [entry.model_dump(mode="json") for entry in schedule]


def _to_read(event: Event, with_schedule: bool) -> EventRead:
    data = EventRead.model_validate(event)
    if not with_schedule:
        data.schedule = None
    return data


@router.get("/events", response_model=List[EventRead])
def get_events(session: Session = Depends(get_session)):
    """Get all events (without schedules)"""
    return [_to_read(event, with_schedule=False) for event in events_crud.get_all_events(session)]


@router.post("/events", response_model=EventRead, status_code=201)
def create_event(event_data: EventCreate, session: Session = Depends(get_session)):
    """Create a new event"""
    event = Event(**event_data.model_dump(exclude={"schedule"}))
    if event_data.schedule is not None:
        event.schedule = _dump_schedule(event_data.schedule)
    event = events_crud.add_event(session, event)
    return _to_read(event, with_schedule=True)


@router.get("/events/{event_id}", response_model=EventRead)
def get_event(
    event_id: int,
    with_schedule: bool = Query(False, description="Include the general schedule"),
    session: Session = Depends(get_session),
):
    """Get one event; the general schedule is only included when requested"""
    event = events_crud.get_event(session, event_id)
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    return _to_read(event, with_schedule)


@router.put("/events/{event_id}", response_model=EventRead)
def update_event(event_id: int, event_data: EventUpdate, session: Session = Depends(get_session)):
    """Update an event"""
    if not events_crud.get_event(session, event_id):
        raise HTTPException(status_code=404, detail="Event not found")

    update_data = event_data.model_dump(exclude_unset=True)
    if "schedule" in update_data and event_data.schedule is not None:
        update_data["schedule"] = _dump_schedule(event_data.schedule)

    event = events_crud.update_event(session, event_id, update_data)
    return _to_read(event, with_schedule=True)


@router.delete("/events/{event_id}", status_code=204)
def delete_event(event_id: int, session: Session = Depends(get_session)):
    """Delete an event"""
    if not events_crud.delete_event(session, event_id):
        raise HTTPException(status_code=404, detail="Event not found")
    return None
