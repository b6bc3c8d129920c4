from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import UniqueConstraint as SAUniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from lems.models.event import Event
    from lems.models.robot_game_match import RobotGameMatch


class RobotGameTable(SQLModel, table=True):
    __tablename__ = "robotgametable"
    __table_args__ = (SAUniqueConstraint("event_id", "name", name="uq_event_table_name"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    event_id: int = Field(foreign_key="event.id", index=True)
    name: str

    # Relationships
    event: "Event" = Relationship(back_populates="tables")
    matches: List["RobotGameMatch"] = Relationship(back_populates="table")
