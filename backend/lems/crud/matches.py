from typing import List

from sqlmodel import Session, select

from lems.models.robot_game_match import RobotGameMatch


def get_event_matches(session: Session, event_id: int) -> List[RobotGameMatch]:
    """Matches of an event in match-number order (the order the field runs them)."""
    return list(
        session.exec(
            select(RobotGameMatch)
            .where(RobotGameMatch.event_id == event_id)
            .order_by(RobotGameMatch.number, RobotGameMatch.id)
        ).all()
    )


def add_match(session: Session, match: RobotGameMatch) -> RobotGameMatch:
    session.add(match)
    session.commit()
    session.refresh(match)
    return match
