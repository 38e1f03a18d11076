# This file defines the liveness endpoint used by the hosting platform.
# The check runs a trivial query so a healthy answer also means the database answered.

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from taskmanager.api.db_access import DatabaseClient
from taskmanager.api.dependencies import get_database_client
from taskmanager.api.error_handlers import database_error_message
from taskmanager.api.schemas.health_schemas import HealthResponse, UnhealthyResponse

router = APIRouter(tags=["health"])
DBDep = Annotated[DatabaseClient, Depends(get_database_client)]


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={500: {"model": UnhealthyResponse}},
)
def health(db: DBDep) -> dict[str, object] | JSONResponse:
    try:
        db.ping()
    except SQLAlchemyError as exc:
        return JSONResponse(
            status_code=500,
            content={"status": "unhealthy", "error": database_error_message(exc)},
        )
    return {"status": "healthy", "database": "connected", "timestamp": _utc_now()}
