from __future__ import annotations

from pathlib import Path
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session

from todolist.settings import settings


def make_engine(url: str) -> Engine:
    """Engine for `url`; SQLite connections may be used from the server's worker threads."""
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args)


engine = make_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


def _sqlite_file(bind: Engine) -> Path | None:
    url = bind.url
    if url.get_backend_name() != "sqlite" or url.database in (None, "", ":memory:"):
        return None
    return Path(url.database)


def init_db(bind: Engine | None = None) -> None:
    """Create the tables, and the data directory first for a file-backed SQLite URL."""
    from todolist.models import Base

    bind = bind or engine
    db_file = _sqlite_file(bind)
    if db_file is not None:
        db_file.parent.mkdir(parents=True, exist_ok=True)
    Base.metadata.create_all(bind)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
