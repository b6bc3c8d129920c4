from typing import List, Optional

from sqlmodel import Session, select

from lems.models.team import Team


def get_event_teams(session: Session, event_id: int) -> List[Team]:
    """Teams of an event ordered by team number."""
    return list(session.exec(select(Team).where(Team.event_id == event_id).order_by(Team.number, Team.id)).all())


def get_event_team(session: Session, event_id: int, team_id: int) -> Optional[Team]:
    team = session.get(Team, team_id)
    if team is None or team.event_id != event_id:
        return None
    return team


def save_team(session: Session, team: Team) -> Team:
    session.add(team)
    session.commit()
    session.refresh(team)
    return team
