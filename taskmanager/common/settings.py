"""
Database and process settings loaded from environment variables.
The hosting environment supplies the MySQL endpoint and credentials; nothing here has a production-safe default.
A full `DATABASE_URL` may replace the MySQL variables for local development and tests.
"""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Final

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, ValidationError
from sqlalchemy.engine import URL, make_url

REQUIRED_MYSQL_ENV_VARS: Final[tuple[str, ...]] = (
    "MYSQL_SERVER",
    "MYSQL_USERNAME",
    "MYSQL_PASSWORD",
    "MYSQL_DATABASE",
)

MYSQL_DRIVERNAME: Final[str] = "mysql+pymysql"


class Settings(BaseModel):
    """Typed runtime configuration for the database connection."""

    model_config = ConfigDict(extra="ignore")

    MYSQL_SERVER: str | None = None
    MYSQL_PORT: int = 3306
    MYSQL_USERNAME: str | None = None
    MYSQL_PASSWORD: str | None = None
    MYSQL_DATABASE: str | None = None
    MYSQL_SSL_REQUIRED: bool = True
    MYSQL_SSL_CA: str | None = None
    DATABASE_URL: str | None = None
    DB_POOL_SIZE: int = 10
    DB_POOL_TIMEOUT_SECONDS: float = 30.0
    DB_POOL_RECYCLE_SECONDS: int = 3600
    LOG_SQL: bool = False
    LOG_LEVEL: str = "INFO"

    def database_url(self) -> URL:
        """Return the SQLAlchemy URL, preferring an explicit `DATABASE_URL`."""

        if self.DATABASE_URL:
            return make_url(self.DATABASE_URL)
        return URL.create(
            MYSQL_DRIVERNAME,
            username=self.MYSQL_USERNAME,
            password=self.MYSQL_PASSWORD,
            host=self.MYSQL_SERVER,
            port=self.MYSQL_PORT,
            database=self.MYSQL_DATABASE,
        )


def load_settings(*, load_env: bool = True) -> Settings:
    """Load and validate settings from `.env` and the process environment."""

    if load_env:
        load_dotenv()

    if not os.getenv("DATABASE_URL"):
        missing = [key for key in REQUIRED_MYSQL_ENV_VARS if not os.getenv(key)]
        if missing:
            missing_values = ", ".join(sorted(missing))
            raise RuntimeError(
                f"Missing required environment variables: {missing_values}. "
                "Set them (or DATABASE_URL) before starting the application."
            )

    try:
        return Settings.model_validate(dict(os.environ))
    except ValidationError as exc:
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached accessor for application settings."""

    return load_settings()
