"""
Shared test configuration.
It provides the environment the settings loader requires and a SQLite-backed database client per test.
These tests are executed by `pytest` locally and in CI and should remain deterministic.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from taskmanager.api.api_config import get_api_config  # noqa: E402
from taskmanager.api.db_access import DatabaseClient  # noqa: E402
from taskmanager.api.dependencies import get_database_client  # noqa: E402
from taskmanager.common.settings import get_settings  # noqa: E402
from tests.api.support import sqlite_database_client  # noqa: E402


@pytest.fixture(autouse=True)
def base_test_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Ensure required environment variables are present and caches are fresh."""

    defaults = {
        "MYSQL_SERVER": "localhost",
        "MYSQL_USERNAME": "task_user",
        "MYSQL_PASSWORD": "task_password",
        "MYSQL_DATABASE": "taskdb",
        "LOG_LEVEL": "INFO",
        "ENV": "test",
    }

    for key, value in defaults.items():
        if os.getenv(key) is None:
            monkeypatch.setenv(key, value)

    get_settings.cache_clear()
    get_api_config.cache_clear()
    get_database_client.cache_clear()
    yield
    get_settings.cache_clear()
    get_api_config.cache_clear()
    get_database_client.cache_clear()


@pytest.fixture
def db_client(tmp_path: Path) -> Iterator[DatabaseClient]:
    """Database client over a fresh SQLite file with foreign keys enforced."""

    client = sqlite_database_client(tmp_path / "tasks.sqlite3")
    yield client
    client.dispose()
