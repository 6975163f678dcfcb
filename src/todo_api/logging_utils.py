"""Logging setup shared by the HTTP server and the management commands."""

from __future__ import annotations

import logging

LOG_FORMAT = '%(asctime)s level=%(levelname)s logger=%(name)s message="%(message)s"'


def configure_logging(level: str = "INFO") -> None:
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(format=LOG_FORMAT)
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO
    root_logger.setLevel(resolved)
