# This file defines the user endpoints under /api/users.
# Users can be listed and created; there are no update or delete routes for them.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from taskmanager.api.dependencies import get_user_service
from taskmanager.api.schemas.common import ErrorResponse
from taskmanager.api.schemas.user_schemas import UserCreate, UserCreated, UserRead
from taskmanager.api.services.user_service import UserService

router = APIRouter(
    prefix="/api/users",
    tags=["users"],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
UserServiceDep = Annotated[UserService, Depends(get_user_service)]


@router.get("", response_model=list[UserRead])
def list_users(service: UserServiceDep) -> list[dict[str, object]]:
    return service.list_users()


@router.post("", response_model=UserCreated, status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreate, service: UserServiceDep) -> dict[str, object]:
    return service.create_user(name=payload.name, email=payload.email)
