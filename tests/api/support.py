# This file provides shared helpers for API endpoint tests.
# It exists so tests can swap the shared database client without touching a real MySQL server.
# The helpers build consistent config objects and scoped TestClient contexts.
# Centralized test wiring keeps API tests small and focused on behavior.

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from taskmanager.api.api_config import ApiConfig
from taskmanager.api.app import create_app
from taskmanager.api.db_access import DatabaseClient
from taskmanager.api.dependencies import get_config, get_database_client
from taskmanager.common.db import build_engine
from taskmanager.common.settings import Settings


def build_test_config() -> ApiConfig:
    """Create deterministic API config for tests."""

    return ApiConfig(
        api_name="Test TaskManager API",
        host="127.0.0.1",
        port=8080,
        environment="test",
        app_version="0.1.0",
        allowed_origins=[],
        enable_metrics=True,
    )


def sqlite_database_client(path: Path) -> DatabaseClient:
    settings = Settings(DATABASE_URL=f"sqlite:///{path}")
    return DatabaseClient(engine=build_engine(settings))


class UnreachableDBClient(DatabaseClient):
    """Client whose health check fails as if the database host were down."""

    def __init__(self, path: Path, *, message: str = "Can't connect to MySQL server") -> None:
        super().__init__(engine=sqlite_database_client(path).engine)
        self._message = message

    def ping(self) -> None:
        raise OperationalError("SELECT 1", {}, Exception(self._message))


@contextmanager
def api_test_client(
    *,
    db_client: DatabaseClient,
    config: ApiConfig | None = None,
) -> Iterator[TestClient]:
    """Yield a TestClient whose startup and handlers use `db_client`."""

    resolved_config = config or build_test_config()
    app = create_app()
    app.dependency_overrides[get_config] = lambda: resolved_config
    app.dependency_overrides[get_database_client] = lambda: db_client

    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()


def row_count(db_client: DatabaseClient, table_name: str) -> int:
    row = db_client.fetch_one(f"SELECT COUNT(*) AS row_count FROM {table_name}")
    return int(row["row_count"]) if row else 0
