from typing import Any, Dict, List, Optional

from sqlmodel import Session, select

from lems.models.event import Event


def get_event(session: Session, event_id: int) -> Optional[Event]:
    return session.get(Event, event_id)


def get_all_events(session: Session) -> List[Event]:
    return list(session.exec(select(Event).order_by(Event.id)).all())


def update_event(session: Session, event_id: int, new_event: Dict[str, Any]) -> Event:
    """
    Apply a partial update to an event, creating it when it does not exist (upsert).
    """
    event = session.get(Event, event_id)
    if event is None:
        event = Event(id=event_id, **new_event)
    else:
        for field, value in new_event.items():
            setattr(event, field, value)

    session.add(event)
    session.commit()
    session.refresh(event)
    return event


def add_event(session: Session, event: Event) -> Event:
    session.add(event)
    session.commit()
    session.refresh(event)
    return event


def add_events(session: Session, events: List[Event]) -> List[Event]:
    session.add_all(events)
    session.commit()
    for event in events:
        session.refresh(event)
    return events


def delete_event(session: Session, event_id: int) -> bool:
    """Delete an event. Returns False when there was nothing to delete."""
    event = session.get(Event, event_id)
    if event is None:
        return False
    session.delete(event)
    session.commit()
    return True
