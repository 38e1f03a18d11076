# This file provides dependency factories for FastAPI routes and startup hooks.
# It exists so the connection pool and services are created once and shared through dependency injection.
# The setup keeps routers thin and makes endpoint tests easy to override.

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from taskmanager.api.api_config import ApiConfig, get_api_config
from taskmanager.api.db_access import DatabaseClient
from taskmanager.api.services.task_service import TaskService
from taskmanager.api.services.user_service import UserService
from taskmanager.common.db import build_engine
from taskmanager.common.settings import get_settings


@lru_cache(maxsize=1)
def get_database_client() -> DatabaseClient:
    return DatabaseClient(engine=build_engine(get_settings()))


def get_user_service(db: Annotated[DatabaseClient, Depends(get_database_client)]) -> UserService:
    return UserService(db=db)


def get_task_service(db: Annotated[DatabaseClient, Depends(get_database_client)]) -> TaskService:
    return TaskService(db=db)


def get_config() -> ApiConfig:
    return get_api_config()
