# This file defines response schemas for the health endpoint.
# It exists to keep the liveness contract explicit for platform liveness checks.

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    database: str
    timestamp: datetime


class UnhealthyResponse(BaseModel):
    status: str
    error: str
