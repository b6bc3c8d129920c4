from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON
from sqlmodel import Column, Field, SQLModel


class CoreValuesForm(SQLModel, table=True):
    __tablename__ = "corevaluesform"

    id: Optional[int] = Field(default=None, primary_key=True)
    event_id: int = Field(foreign_key="event.id", index=True)
    observers: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    observer_affiliation: str = Field(default="")
    demonstrators: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    demonstrator_affiliation: str = Field(default="")
    # {category: {"team_or_student": {"fields": [...], "other": ""}, "anyone_else": {...}}}
    data: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))
    details: str = Field(default="")
    completed_by: Dict[str, str] = Field(default_factory=dict, sa_column=Column(JSON))
    actions_taken: Optional[str] = Field(default=None)
    severity: str = Field(default="standardExpectations")
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow, sa_column_kwargs={"onupdate": datetime.utcnow})
