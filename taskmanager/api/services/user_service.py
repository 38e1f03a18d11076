# This file implements the user queries behind the /api/users endpoints.
# Each method is a single round trip; email uniqueness and not-null rules are enforced by the store.

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import insert, select

from taskmanager.api.db_access import DatabaseClient
from taskmanager.common.ddl import users

logger = logging.getLogger(__name__)


class UserService:
    """Data access for user endpoints."""

    def __init__(self, *, db: DatabaseClient) -> None:
        self.db = db

    def list_users(self) -> list[dict[str, Any]]:
        query = select(
            users.c.id,
            users.c.name,
            users.c.email,
            users.c.created_at,
        ).order_by(users.c.created_at.desc(), users.c.id.desc())
        return self.db.fetch_all(query)

    def create_user(self, *, name: str, email: str) -> dict[str, Any]:
        user_id = self.db.insert(insert(users).values(name=name, email=email))
        logger.info("Created user id=%s", user_id)
        return {"id": user_id, "name": name, "email": email}
