from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

ROLE_TYPES = (
    "judge",
    "judge-advisor",
    "lead-judge",
    "referee",
    "head-referee",
    "scorekeeper",
    "pit-admin",
    "tournament-manager",
    "audience-display",
    "queuer",
    "mc",
    "reports",
)

LOCALIZED_ROLES = {
    "judge": "Judge",
    "judge-advisor": "Judge Advisor",
    "lead-judge": "Lead Judge",
    "referee": "Referee",
    "head-referee": "Head Referee",
    "scorekeeper": "Scorekeeper",
    "pit-admin": "Pit Admin",
    "tournament-manager": "Tournament Manager",
    "audience-display": "Audience Display",
    "queuer": "Queuer",
    "mc": "MC",
    "reports": "Reports",
}


class User(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(index=True, unique=True)
    role: str  # One of ROLE_TYPES
    event_id: Optional[int] = Field(default=None, foreign_key="event.id")
    auth_token: str = Field(index=True, unique=True)
    is_admin: bool = Field(default=False)
    created_at: datetime = Field(default_factory=datetime.utcnow)
