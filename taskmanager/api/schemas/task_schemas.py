# This file defines request and response schemas for task endpoints.
# It exists so required and optional task fields, and the status default, are stated in one place.
# Status membership in the enumerated set is enforced by the database, not here.

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from taskmanager.common.ddl import DEFAULT_TASK_STATUS


class TaskCreate(BaseModel):
    user_id: int
    title: str
    description: str | None = None
    status: str | None = None

    def resolved_status(self) -> str:
        """Status to store: an omitted, null, or empty status means `pending`."""

        return self.status or DEFAULT_TASK_STATUS


class TaskUpdate(BaseModel):
    """Partial update; only the fields present in the body are written."""

    title: str | None = None
    description: str | None = None
    status: str | None = None

    def supplied_fields(self) -> dict[str, object]:
        return self.model_dump(exclude_unset=True)


class TaskCreated(BaseModel):
    id: int
    user_id: int
    title: str
    description: str | None = None
    status: str | None = None


class TaskRead(BaseModel):
    id: int
    user_id: int
    title: str
    description: str | None = None
    status: str
    created_at: datetime
    updated_at: datetime
    user_name: str
    user_email: str
