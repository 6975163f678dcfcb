from __future__ import annotations

import logging
from typing import Generator

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .models import Base

logger = logging.getLogger(__name__)


class Database:
    """
    Owns the SQLAlchemy engine and session factory for one datastore.

    An instance is built once by the application factory and handed to the
    request handlers through ``app.state``; nothing in the package keeps a
    module-level engine.
    """

    def __init__(self, url: str, echo: bool = False) -> None:
        self.url = url
        self.engine: Engine = create_engine(url, echo=echo, **_engine_options(url))
        self._session_factory = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)

    def session(self) -> Session:
        return self._session_factory()

    def ping(self) -> None:
        """Open a connection and run a trivial statement; raises on failure."""
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def create_tables(self) -> None:
        Base.metadata.create_all(self.engine)

    def drop_tables(self) -> None:
        Base.metadata.drop_all(self.engine)

    def dispose(self) -> None:
        self.engine.dispose()


def _engine_options(url: str) -> dict:
    if not url.startswith("sqlite"):
        return {}
    options: dict = {"connect_args": {"check_same_thread": False}}
    # In-memory SQLite lives inside one connection; share it across threads.
    if url in {"sqlite://", "sqlite:///:memory:"}:
        options["poolclass"] = StaticPool
    return options


# PUBLIC_INTERFACE
def get_session(request: Request) -> Generator[Session, None, None]:
    """FastAPI dependency yielding a session bound to the app's Database."""
    database: Database = request.app.state.database
    session = database.session()
    try:
        yield session
    finally:
        session.close()
