import datetime as dt

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from todolist.api.deps import get_now
from todolist.db import get_db
from todolist.main import create_app
from todolist.models import Base

# Monday
FIXED_NOW = dt.datetime(2024, 1, 1, 10, 0)


@pytest.fixture()
def session_factory():
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def test_app(session_factory):
    app = create_app(init_storage=False)

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_now] = lambda: FIXED_NOW
    return app, session_factory


@pytest.fixture()
def client(test_app):
    app, _ = test_app
    return TestClient(app)
