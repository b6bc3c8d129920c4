from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import UniqueConstraint as SAUniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from lems.models.event import Event
    from lems.models.robot_game_match import RobotGameMatch


class Team(SQLModel, table=True):
    __table_args__ = (
        # Team numbers are unique within an event
        SAUniqueConstraint("event_id", "number", name="uq_event_team_number"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    event_id: int = Field(foreign_key="event.id", index=True)
    number: int
    name: str
    affiliation_name: Optional[str] = Field(default=None)
    affiliation_city: Optional[str] = Field(default=None)
    registered: bool = Field(default=False)  # Set by pit admin on arrival
    created_at: datetime = Field(default_factory=datetime.utcnow)

    # Relationships
    event: "Event" = Relationship(back_populates="teams")
    matches: List["RobotGameMatch"] = Relationship(back_populates="team")
