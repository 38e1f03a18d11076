"""
Integration tests for the startup schema manager.
They run against SQLite files; the MySQL check only runs with RUN_MYSQL_INTEGRATION=1.
"""

from __future__ import annotations

import os
from datetime import UTC, datetime, timedelta, timezone
from pathlib import Path

import pytest
from sqlalchemy import inspect, insert, select
from sqlalchemy.dialects import mysql
from sqlalchemy.exc import OperationalError
from sqlalchemy.schema import CreateTable

from taskmanager.api.db_access import DatabaseClient
from taskmanager.common.ddl import apply_task_ddl, tasks, users
from taskmanager.common.settings import load_settings
from tests.api.support import api_test_client, row_count, sqlite_database_client


def test_schema_creation_is_idempotent_and_keeps_data(db_client: DatabaseClient) -> None:
    apply_task_ddl(db_client)
    db_client.insert(insert(users).values(name="Kept", email="kept@example.com"))

    apply_task_ddl(db_client)

    assert set(inspect(db_client.engine).get_table_names()) >= {"users", "tasks"}
    assert row_count(db_client, "users") == 1


def test_tasks_table_references_users_with_cascade(db_client: DatabaseClient) -> None:
    apply_task_ddl(db_client)

    foreign_keys = inspect(db_client.engine).get_foreign_keys("tasks")

    assert len(foreign_keys) == 1
    assert foreign_keys[0]["referred_table"] == "users"
    assert foreign_keys[0]["constrained_columns"] == ["user_id"]
    assert foreign_keys[0]["options"].get("ondelete") == "CASCADE"


def test_raw_sql_inserts_get_server_side_timestamps(db_client: DatabaseClient) -> None:
    apply_task_ddl(db_client)

    db_client.execute("INSERT INTO users (name, email) VALUES ('Raw', 'raw@example.com')")
    user = db_client.fetch_one(select(users.c.id, users.c.created_at))
    db_client.execute(
        "INSERT INTO tasks (user_id, title) VALUES (:user_id, 'Raw task')",
        {"user_id": user["id"]},
    )
    task = db_client.fetch_one(select(tasks.c.status, tasks.c.created_at, tasks.c.updated_at))

    assert user["created_at"] is not None
    assert user["created_at"].tzinfo is UTC
    assert task["status"] == "pending"
    assert task["created_at"] is not None
    assert task["updated_at"] is not None


def test_timestamps_are_stored_as_utc_and_read_back_aware(db_client: DatabaseClient) -> None:
    apply_task_ddl(db_client)
    local = datetime(2024, 3, 1, 12, 30, tzinfo=timezone(timedelta(hours=2)))

    db_client.insert(insert(users).values(name="Zoned", email="zoned@example.com", created_at=local))
    row = db_client.fetch_one(select(users.c.created_at))

    assert row["created_at"] == datetime(2024, 3, 1, 10, 30, tzinfo=UTC)
    assert row["created_at"].tzinfo is UTC


def test_mysql_ddl_declares_microsecond_server_defaults() -> None:
    ddl = str(CreateTable(tasks).compile(dialect=mysql.dialect()))

    assert "DATETIME(6)" in ddl
    assert "DEFAULT CURRENT_TIMESTAMP(6) ON UPDATE CURRENT_TIMESTAMP(6)" in ddl
    assert ddl.count("DEFAULT CURRENT_TIMESTAMP(6)") == 2


def test_sqlite_ddl_declares_plain_current_timestamp(db_client: DatabaseClient) -> None:
    ddl = str(CreateTable(tasks).compile(dialect=db_client.engine.dialect))

    assert ddl.count("DEFAULT CURRENT_TIMESTAMP") == 2
    assert "ON UPDATE" not in ddl


def test_schema_failure_raises(tmp_path: Path) -> None:
    broken = sqlite_database_client(tmp_path / "missing-dir" / "tasks.sqlite3")

    with pytest.raises(OperationalError):
        apply_task_ddl(broken)


def test_startup_aborts_when_schema_cannot_be_created(tmp_path: Path) -> None:
    broken = sqlite_database_client(tmp_path / "missing-dir" / "tasks.sqlite3")

    with pytest.raises(OperationalError):
        with api_test_client(db_client=broken):
            pass


@pytest.mark.integration
@pytest.mark.skipif(
    os.getenv("RUN_MYSQL_INTEGRATION") != "1",
    reason="Set RUN_MYSQL_INTEGRATION=1 with MYSQL_* variables to run against MySQL",
)
def test_schema_on_live_mysql() -> None:
    from taskmanager.common.db import build_engine

    client = DatabaseClient(engine=build_engine(load_settings()))
    try:
        apply_task_ddl(client)
        client.ping()
    finally:
        client.dispose()
