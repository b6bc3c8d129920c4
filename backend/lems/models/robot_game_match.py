from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from lems.models.event import Event
    from lems.models.robot_game_table import RobotGameTable
    from lems.models.team import Team


class RobotGameMatch(SQLModel, table=True):
    __tablename__ = "robotgamematch"

    id: Optional[int] = Field(default=None, primary_key=True)
    event_id: int = Field(foreign_key="event.id", index=True)
    match_type: str  # "practice" | "ranking"
    round_number: int
    number: int  # Match number within the event
    table_id: int = Field(foreign_key="robotgametable.id")
    team_id: int = Field(foreign_key="team.id")
    scheduled_time: Optional[datetime] = Field(default=None)
    end_time: Optional[datetime] = Field(default=None)
    status: str = Field(default="not-started")  # "not-started" | "in-progress" | "completed"

    # Relationships
    event: "Event" = Relationship(back_populates="matches")
    table: "RobotGameTable" = Relationship(back_populates="matches")
    team: "Team" = Relationship(back_populates="matches")
