from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from lems.database import get_session
from lems.main import app

TEST_DATABASE_URL = "sqlite:///:memory:"

# ============================================================================
# Test Database Setup with StaticPool
# ============================================================================
# 1. Use sqlite:///:memory: with StaticPool so ALL sessions share same DB
# 2. check_same_thread=False required for TestClient/threaded access
# 3. All models MUST be imported before create_all() (see session_fixture)
# 4. App dependency overridden to use test_engine (see client_fixture)
# 5. Tables dropped and recreated per test
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


def override_get_session():
    """Override session to use test engine"""
    with Session(test_engine) as session:
        yield session


@pytest.fixture(name="session", scope="function")
def session_fixture():
    """Provide a test database session on a fresh schema"""
    # Import all models to ensure they're registered BEFORE create_all
    from lems.models.core_values_form import CoreValuesForm  # noqa: F401
    from lems.models.event import Event  # noqa: F401
    from lems.models.robot_game_match import RobotGameMatch  # noqa: F401
    from lems.models.robot_game_table import RobotGameTable  # noqa: F401
    from lems.models.team import Team  # noqa: F401
    from lems.models.user import User  # noqa: F401

    SQLModel.metadata.drop_all(test_engine)
    SQLModel.metadata.create_all(test_engine)

    with Session(test_engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session: Session):
    """Provide a test client with overridden database session

    Override MUST be set BEFORE TestClient() and stay in place
    for the entire duration so the app never uses its own engine.
    """
    app.dependency_overrides[get_session] = override_get_session

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


# ============================================================================
# Event fixtures
# ============================================================================

GENERAL_SCHEDULE = [
    {
        "name": "Opening ceremony",
        "start_time": "2026-03-01T08:30:00",
        "end_time": "2026-03-01T09:00:00",
        "roles": ["referee", "judge", "head-referee"],
    },
    {
        "name": "Judges briefing",
        "start_time": "2026-03-01T09:00:00",
        "end_time": "2026-03-01T09:15:00",
        "roles": ["judge"],
    },
    {
        "name": "Referee lunch",
        "start_time": "2026-03-01T12:00:00",
        "end_time": "2026-03-01T12:45:00",
        "roles": ["referee"],
    },
]


@pytest.fixture
def seeded_event(session: Session):
    """An event with a general schedule, two tables, three teams and a handful of matches."""
    from lems.models.event import Event
    from lems.models.robot_game_match import RobotGameMatch
    from lems.models.robot_game_table import RobotGameTable
    from lems.models.team import Team

    event = Event(name="Haifa Qualifier", schedule=GENERAL_SCHEDULE)
    session.add(event)
    session.commit()
    session.refresh(event)

    tables = [RobotGameTable(event_id=event.id, name=name) for name in ("Red", "Blue")]
    teams = [
        Team(event_id=event.id, number=number, name=name)
        for number, name in ((101, "Gears"), (202, "Sparks"), (303, "Bolts"))
    ]
    session.add_all(tables + teams)
    session.commit()
    for row in tables + teams:
        session.refresh(row)

    rows = [
        # (type, round, number, table index, team index)
        ("practice", 1, 1, 0, 0),
        ("practice", 1, 1, 1, 1),
        ("practice", 1, 2, 0, 2),
        ("ranking", 1, 3, 0, 0),
        ("ranking", 1, 3, 1, 1),
        ("ranking", 2, 4, 0, 2),
    ]
    matches = [
        RobotGameMatch(
            event_id=event.id,
            match_type=match_type,
            round_number=round_number,
            number=number,
            table_id=tables[table_index].id,
            team_id=teams[team_index].id,
            scheduled_time=datetime(2026, 3, 1, 10, number),
        )
        for match_type, round_number, number, table_index, team_index in rows
    ]
    session.add_all(matches)
    session.commit()
    for match in matches:
        session.refresh(match)

    return {"event": event, "tables": tables, "teams": teams, "matches": matches}


@pytest.fixture
def make_user(session: Session):
    """Factory for users with a known auth token."""
    from lems.models.user import User

    def _make(role: str, event_id=None, token=None, is_admin: bool = False):
        user = User(
            username=f"{role}-{event_id}-{token or role}",
            role=role,
            event_id=event_id,
            auth_token=token or f"token-{role}-{event_id}",
            is_admin=is_admin,
        )
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return _make
