"""
Engine and session for the LEMS store.

DATABASE_URL selects the database (SQLite file by default); SQL_ECHO=true logs
every statement. Both may come from a .env file.
"""
import os
from typing import Generator

from dotenv import load_dotenv
from sqlmodel import Session, SQLModel, create_engine

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./lems.db")
SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() in ("true", "1", "yes")

# FastAPI serves sync routes from a threadpool
_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, echo=SQL_ECHO, connect_args=_connect_args)


def get_session() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


def init_db() -> None:
    """Create any missing tables."""
    import lems.models  # noqa: F401  registers every table on SQLModel.metadata

    SQLModel.metadata.create_all(engine)
