# This file defines request and response schemas for user endpoints.
# Presence of the required fields is checked here; uniqueness is left to the store.

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class UserCreate(BaseModel):
    name: str
    email: str


class UserCreated(BaseModel):
    id: int
    name: str
    email: str


class UserRead(BaseModel):
    id: int
    name: str
    email: str
    created_at: datetime
