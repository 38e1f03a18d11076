"""DDL for the users and tasks tables."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import (
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects import mysql
from sqlalchemy.engine import Dialect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.expression import ColumnElement
from sqlalchemy.types import TypeDecorator, TypeEngine

from taskmanager.api.db_access import DatabaseClient

logger = logging.getLogger(__name__)

TASK_STATUSES: tuple[str, ...] = ("pending", "in_progress", "completed")
DEFAULT_TASK_STATUS = "pending"


class UTCDateTime(TypeDecorator):
    """Stores naive UTC and reads back timezone-aware UTC datetimes.

    MySQL gets microsecond precision so created/updated stamps stay ordered within a second.
    """

    impl = DateTime
    cache_ok = True

    def load_dialect_impl(self, dialect: Dialect) -> TypeEngine[Any]:
        if dialect.name == "mysql":
            return dialect.type_descriptor(mysql.DATETIME(fsp=6))
        return dialect.type_descriptor(DateTime())

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(UTC).replace(tzinfo=None)
        return value

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value


class CurrentTimestamp(ColumnElement):
    """Server-side default: the insert time."""

    inherit_cache = True


class CurrentTimestampOnUpdate(ColumnElement):
    """Server-side default that MySQL also refreshes on every UPDATE."""

    inherit_cache = True


@compiles(CurrentTimestamp)
@compiles(CurrentTimestampOnUpdate)
def _compile_current_timestamp(element: ColumnElement, compiler: Any, **kw: Any) -> str:
    return "CURRENT_TIMESTAMP"


@compiles(CurrentTimestamp, "mysql")
def _compile_current_timestamp_mysql(element: ColumnElement, compiler: Any, **kw: Any) -> str:
    return "CURRENT_TIMESTAMP(6)"


@compiles(CurrentTimestampOnUpdate, "mysql")
def _compile_current_timestamp_on_update_mysql(
    element: ColumnElement, compiler: Any, **kw: Any
) -> str:
    return "CURRENT_TIMESTAMP(6) ON UPDATE CURRENT_TIMESTAMP(6)"


def utc_now() -> datetime:
    """Application-side stamp; keeps microsecond ordering where the server default cannot."""

    return datetime.now(tz=UTC)


metadata = MetaData()

users = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(100), nullable=False),
    Column("email", String(100), nullable=False, unique=True),
    Column(
        "created_at",
        UTCDateTime(),
        nullable=False,
        default=utc_now,
        server_default=CurrentTimestamp(),
    ),
)

tasks = Table(
    "tasks",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "user_id",
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("title", String(200), nullable=False),
    Column("description", Text, nullable=True),
    Column(
        "status",
        Enum(*TASK_STATUSES, name="task_status", create_constraint=True),
        nullable=False,
        default=DEFAULT_TASK_STATUS,
        server_default=DEFAULT_TASK_STATUS,
    ),
    Column(
        "created_at",
        UTCDateTime(),
        nullable=False,
        default=utc_now,
        server_default=CurrentTimestamp(),
    ),
    # SQLite has no ON UPDATE clause; there the refresh comes from `onupdate` alone.
    Column(
        "updated_at",
        UTCDateTime(),
        nullable=False,
        default=utc_now,
        onupdate=utc_now,
        server_default=CurrentTimestampOnUpdate(),
    ),
)

TASK_DDL_ORDER: list[Table] = [users, tasks]


def apply_task_ddl(db: DatabaseClient) -> None:
    """Create the users and tasks tables when absent; safe to run on every start."""

    for table in TASK_DDL_ORDER:
        try:
            with db.engine.begin() as connection:
                table.create(connection, checkfirst=True)
        except SQLAlchemyError:
            logger.exception("Failed to ensure table %s", table.name)
            raise
        logger.info("Table %s is present", table.name)
