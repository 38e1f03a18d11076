# This file implements the task queries behind the /api/tasks endpoints.
# It exists so routers can list, create, update, and delete tasks without embedding SQL.
# Listing joins each task to its owner; tasks without a resolvable owner never appear.
# Foreign-key, not-null, and status enum rules are left to the database schema.

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import delete, insert, select, update

from taskmanager.api.db_access import DatabaseClient
from taskmanager.common.ddl import tasks, users

logger = logging.getLogger(__name__)

UPDATABLE_TASK_FIELDS: frozenset[str] = frozenset({"title", "description", "status"})


class TaskService:
    """Data access for task endpoints."""

    def __init__(self, *, db: DatabaseClient) -> None:
        self.db = db

    def list_tasks(self) -> list[dict[str, Any]]:
        query = (
            select(
                tasks.c.id,
                tasks.c.user_id,
                tasks.c.title,
                tasks.c.description,
                tasks.c.status,
                tasks.c.created_at,
                tasks.c.updated_at,
                users.c.name.label("user_name"),
                users.c.email.label("user_email"),
            )
            .select_from(tasks.join(users, tasks.c.user_id == users.c.id))
            .order_by(tasks.c.created_at.desc(), tasks.c.id.desc())
        )
        return self.db.fetch_all(query)

    def create_task(
        self,
        *,
        user_id: int,
        title: str,
        description: str | None,
        status: str,
    ) -> int:
        task_id = self.db.insert(
            insert(tasks).values(
                user_id=user_id,
                title=title,
                description=description,
                status=status,
            )
        )
        logger.info("Created task id=%s for user id=%s", task_id, user_id)
        return task_id

    def update_task(self, *, task_id: int, fields: Mapping[str, Any]) -> int:
        """Write only the supplied fields; `updated_at` is refreshed by the column default."""

        unknown = set(fields) - UPDATABLE_TASK_FIELDS
        if unknown:
            raise ValueError(f"Fields cannot be updated: {sorted(unknown)}")

        affected = self.db.execute(update(tasks).where(tasks.c.id == task_id).values(**fields))
        if affected == 0:
            logger.info("Update matched no task with id=%s", task_id)
        return affected

    def delete_task(self, *, task_id: int) -> int:
        affected = self.db.execute(delete(tasks).where(tasks.c.id == task_id))
        if affected == 0:
            logger.info("Delete matched no task with id=%s", task_id)
        return affected
