"""
One-off table management for the todos datastore.

The server never creates or drops the table on its own (unless
CREATE_TABLES is set). Run this once against a fresh database, and again
with ``drop-table`` followed by ``create-table`` whenever the Todo model
changes, since there are no migrations.

Usage:
    python -m todo_api.manage create-table
    python -m todo_api.manage drop-table
    python -m todo_api.manage --database-url sqlite:///./other.sqlite3 create-table
"""
from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from .db import Database
from .logging_utils import configure_logging
from .settings import get_settings

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="todo-api-manage", description="Create or drop the todos table.")
    parser.add_argument(
        "--database-url",
        default=None,
        help="SQLAlchemy URL; defaults to DATABASE_URL or sqlite:///./db.sqlite3",
    )
    parser.add_argument("command", choices=["create-table", "drop-table"])
    return parser


# PUBLIC_INTERFACE
def main(argv: Optional[List[str]] = None) -> int:
    """Run a table command and return the process exit code."""
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level)

    database = Database(args.database_url or settings.database_url, echo=settings.sql_echo)
    try:
        if args.command == "create-table":
            database.create_tables()
            logger.info("Table 'todos' created...")
        else:
            database.drop_tables()
            logger.info("Table 'todos' dropped...")
    except SQLAlchemyError:
        logger.exception("Table command %s failed", args.command)
        return 1
    finally:
        database.dispose()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
