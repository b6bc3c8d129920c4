from typing import List, Optional

from sqlmodel import Session, select

from lems.models.robot_game_table import RobotGameTable


def get_event_tables(session: Session, event_id: int) -> List[RobotGameTable]:
    return list(
        session.exec(
            select(RobotGameTable).where(RobotGameTable.event_id == event_id).order_by(RobotGameTable.id)
        ).all()
    )


def get_event_table(session: Session, event_id: int, table_id: int) -> Optional[RobotGameTable]:
    table = session.get(RobotGameTable, table_id)
    if table is None or table.event_id != event_id:
        return None
    return table


def add_table(session: Session, table: RobotGameTable) -> RobotGameTable:
    session.add(table)
    session.commit()
    session.refresh(table)
    return table
