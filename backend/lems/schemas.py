"""
Read models shared by the HTTP API and the live field-schedule client.

The API serializes rows through these models and the client parses the same
payloads back, so both sides agree on one shape per collection.
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict

MatchType = Literal["practice", "ranking"]


class ScheduleEntry(BaseModel):
    """One slot of an event's published general schedule."""

    name: str
    start_time: datetime
    end_time: datetime
    roles: List[str] = []


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    role: str
    event_id: Optional[int] = None
    is_admin: bool = False


class EventRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    color: Optional[str] = None
    schedule: Optional[List[ScheduleEntry]] = None  # Only present when requested


class TeamRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    event_id: int
    number: int
    name: str
    affiliation_name: Optional[str] = None
    affiliation_city: Optional[str] = None
    registered: bool = False


class TableRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    event_id: int
    name: str


class MatchRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    event_id: int
    match_type: MatchType
    round_number: int
    number: int
    table_id: int
    team_id: int
    scheduled_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    status: str = "not-started"
