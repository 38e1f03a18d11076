# This file defines runtime settings for the API layer in one place.
# It exists so the service name, bind address, CORS origins, and metrics can be configured without code edits.
# The config loader reads environment variables and applies defaults for local development.
# Database credentials live in taskmanager.common.settings.

from __future__ import annotations

import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator


class ApiConfig(BaseModel):
    """Typed API runtime configuration."""

    model_config = ConfigDict(extra="ignore")

    api_name: str = "TaskManager API"
    host: str = "0.0.0.0"
    port: int = 8080
    environment: str = "local"
    app_version: str = "0.1.0"
    allowed_origins: list[str] = Field(default_factory=list)
    enable_metrics: bool = True

    @field_validator("port")
    @classmethod
    def validate_port(cls, value: int) -> int:
        if not 0 < value < 65536:
            raise ValueError("port must be between 1 and 65535.")
        return value


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "y", "on"}:
        return True
    if value in {"0", "false", "no", "n", "off"}:
        return False
    raise ValueError(f"{name} must be boolean-like, got {raw!r}")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


def _env_list(name: str, default: list[str] | None = None) -> list[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default or [])
    return [item.strip() for item in raw.split(",") if item.strip()]


def load_api_config(*, load_env: bool = True) -> ApiConfig:
    """Load API configuration from `.env` and process environment."""

    if load_env:
        load_dotenv()

    config_values: dict[str, object] = {
        "api_name": os.getenv("API_NAME", "TaskManager API"),
        "host": os.getenv("API_HOST", "0.0.0.0"),
        "port": _env_int("PORT", 8080),
        "environment": os.getenv("ENV", "local"),
        "app_version": os.getenv("APP_VERSION", "0.1.0"),
        "allowed_origins": _env_list("API_ALLOWED_ORIGINS", []),
        "enable_metrics": _env_bool("API_ENABLE_METRICS", True),
    }
    return ApiConfig.model_validate(config_values)


@lru_cache(maxsize=1)
def get_api_config() -> ApiConfig:
    """Cached accessor for API config."""

    return load_api_config()
