"""Shared fixtures: every test gets its own app around an in-memory database."""

import pytest
from fastapi.testclient import TestClient

from todo_api.db import Database
from todo_api.main import create_app
from todo_api.settings import Settings


def make_settings(**overrides) -> Settings:
    values = dict(
        database_url="sqlite://",
        host="127.0.0.1",
        port=3000,
        cors_allow_origins=["*"],
        log_level="INFO",
        create_tables=False,
        sql_echo=False,
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def database():
    """In-memory SQLite with the todos table already created."""
    db = Database("sqlite://")
    db.create_tables()
    yield db
    db.dispose()


@pytest.fixture
def session(database):
    s = database.session()
    yield s
    s.close()


@pytest.fixture
def app(settings, database):
    return create_app(settings=settings, database=database)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def make_app():
    """Factory for apps with custom settings or a custom Database."""

    def _make(database=None, **overrides):
        return create_app(settings=make_settings(**overrides), database=database)

    return _make
