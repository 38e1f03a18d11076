# This file defines shared schema pieces reused by multiple API endpoints.
# It exists so confirmation and error payloads stay consistent across routers.

from __future__ import annotations

from pydantic import BaseModel


class MessageResponse(BaseModel):
    message: str
    id: int


class ErrorResponse(BaseModel):
    error: str
