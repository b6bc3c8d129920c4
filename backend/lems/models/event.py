from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from sqlalchemy import JSON
from sqlmodel import Column, Field, Relationship, SQLModel

if TYPE_CHECKING:
    from lems.models.robot_game_match import RobotGameMatch
    from lems.models.robot_game_table import RobotGameTable
    from lems.models.team import Team


class Event(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    start_date: Optional[datetime] = Field(default=None)
    end_date: Optional[datetime] = Field(default=None)
    color: Optional[str] = Field(default=None)

    # Published general schedule: ordered list of
    # {"name", "start_time", "end_time", "roles": [...]} entries
    schedule: Optional[List[Dict[str, Any]]] = Field(default=None, sa_column=Column(JSON, nullable=True))

    created_at: datetime = Field(default_factory=datetime.utcnow)

    # Relationships
    teams: List["Team"] = Relationship(back_populates="event")
    tables: List["RobotGameTable"] = Relationship(back_populates="event")
    matches: List["RobotGameMatch"] = Relationship(back_populates="event")
