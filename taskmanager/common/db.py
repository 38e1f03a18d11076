"""
Database engine construction.
The engine owns the bounded connection pool shared by every request handler.
MySQL connections always negotiate TLS; SQLite URLs (development and tests) get foreign-key enforcement.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from taskmanager.common.settings import Settings

logger = logging.getLogger(__name__)

# Server-side CURRENT_TIMESTAMP defaults must be UTC, matching the application-side stamps.
MYSQL_SESSION_INIT = "SET time_zone = '+00:00'"


def mysql_ssl_connect_args(settings: Settings) -> dict[str, Any]:
    """Return PyMySQL `connect_args` requesting an encrypted channel."""

    if not settings.MYSQL_SSL_REQUIRED:
        return {}
    if settings.MYSQL_SSL_CA:
        return {"ssl": {"ca": settings.MYSQL_SSL_CA}}
    # No CA bundle: encrypt but accept managed or self-signed server certificates.
    return {"ssl": {"check_hostname": False, "verify_mode": False}}


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(settings: Settings) -> Engine:
    """Create the process-wide engine and its connection pool."""

    url = settings.database_url()
    backend = url.get_backend_name()
    engine_kwargs: dict[str, Any] = {"pool_pre_ping": True, "future": True}

    if backend == "sqlite":
        engine = create_engine(url, **engine_kwargs)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    else:
        engine_kwargs.update(
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=0,
            pool_timeout=settings.DB_POOL_TIMEOUT_SECONDS,
            pool_recycle=settings.DB_POOL_RECYCLE_SECONDS,
        )
        if backend == "mysql":
            engine_kwargs["connect_args"] = {
                "init_command": MYSQL_SESSION_INIT,
                **mysql_ssl_connect_args(settings),
            }
        engine = create_engine(url, **engine_kwargs)

    logger.info(
        "Database engine created for %s (host=%s, database=%s)",
        backend,
        url.host or "-",
        url.database or "-",
    )
    return engine
