# This file wraps database access so API services can run parameterized SQL safely.
# It exists to keep SQL execution details out of router code and make testing easier.
# Each call checks one connection out of the pool for a single statement and returns it.
# Keeping this layer small makes query behavior easier to audit and troubleshoot.

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.sql import Executable

Statement = str | Executable


def _as_executable(statement: Statement) -> Executable:
    if isinstance(statement, str):
        return text(statement)
    return statement


class DatabaseClient:
    """Minimal SQLAlchemy wrapper for API read/write access."""

    def __init__(self, *, engine: Engine) -> None:
        self._engine = engine

    @property
    def engine(self) -> Engine:
        return self._engine

    def ping(self) -> None:
        """Run a trivial query, raising the driver error on failure."""

        with self._engine.connect() as connection:
            connection.execute(text("SELECT 1"))

    def fetch_all(
        self, statement: Statement, params: Mapping[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        with self._engine.connect() as connection:
            rows = connection.execute(_as_executable(statement), dict(params or {})).mappings().all()
        return [dict(row) for row in rows]

    def fetch_one(
        self, statement: Statement, params: Mapping[str, Any] | None = None
    ) -> dict[str, Any] | None:
        with self._engine.connect() as connection:
            row = connection.execute(_as_executable(statement), dict(params or {})).mappings().first()
        return dict(row) if row is not None else None

    def execute(self, statement: Statement, params: Mapping[str, Any] | None = None) -> int:
        """Run a write statement and return the number of affected rows."""

        with self._engine.begin() as connection:
            result = connection.execute(_as_executable(statement), dict(params or {}))
            return result.rowcount

    def insert(self, statement: Executable, params: Mapping[str, Any] | None = None) -> Any:
        """Run an INSERT construct and return the generated primary key."""

        with self._engine.begin() as connection:
            result = connection.execute(statement, dict(params or {}))
            return result.inserted_primary_key[0]

    def dispose(self) -> None:
        self._engine.dispose()
