"""
Logging configuration helpers.
Every module logs through `logging.getLogger(__name__)`; this sets up the root handler once per process.
uvicorn is started without its own log config, so its loggers propagate here and share the format.
"""

from __future__ import annotations

import logging

from taskmanager.common.settings import get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# Per-statement SQL and per-request access lines drown the service's own messages.
NOISY_LOGGERS: tuple[str, ...] = ("sqlalchemy.engine", "uvicorn.access")

_LOGGING_CONFIGURED = False


def configure_logging() -> None:
    """Configure process-wide logging from environment settings."""

    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    settings = get_settings()
    level_name = settings.LOG_LEVEL.upper()
    level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(level=level, format=LOG_FORMAT)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
    if settings.LOG_SQL:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)

    _LOGGING_CONFIGURED = True
