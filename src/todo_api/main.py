from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable, Optional

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from .db import Database
from .errors import register_error_handlers
from .logging_utils import configure_logging
from .routers import todos as todos_router
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "todos", "description": "Create, read, update and delete todo items."},
]


def _connect(database: Database, settings: Settings) -> None:
    """Check the datastore at startup. A failure is logged, never fatal."""
    try:
        database.ping()
        if settings.create_tables:
            database.create_tables()
            logger.info("Table 'todos' created...")
    except SQLAlchemyError:
        logger.exception("DB not connected...")
        return
    logger.info("Connected to DB...")


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: configuration; read from the environment when omitted.
        database: datastore client; built from settings.database_url when omitted.
            Tests pass an in-memory SQLite Database here.
    """
    settings = settings or get_settings()
    database = database or Database(settings.database_url, echo=settings.sql_echo)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        _connect(database, settings)
        yield
        database.dispose()

    app = FastAPI(
        title="Todo API",
        description="REST API for managing a list of todo items stored in a relational table.",
        version="0.1.0",
        openapi_tags=openapi_tags,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database

    register_error_handlers(app)

    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_request_time(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        logger.info(
            "Time: %d ms since January 1, 1970 (%s %s)",
            int(time.time() * 1000),
            request.method,
            request.url.path,
        )
        return await call_next(request)

    app.include_router(todos_router.router)
    return app


app = create_app()


# PUBLIC_INTERFACE
def run() -> None:
    """Serve the application with uvicorn on the configured host and port."""
    import uvicorn

    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Server is running on port %d", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
