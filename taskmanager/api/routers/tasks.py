# This file defines the task endpoints under /api/tasks.
# It exists so clients can list, create, update, and delete tasks with one store round trip each.
# Update and delete report success even when no row matched the given id.
# Updates only write the fields present in the request body.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from taskmanager.api.dependencies import get_task_service
from taskmanager.api.error_handlers import APIError
from taskmanager.api.schemas.common import ErrorResponse, MessageResponse
from taskmanager.api.schemas.task_schemas import TaskCreate, TaskCreated, TaskRead, TaskUpdate
from taskmanager.api.services.task_service import TaskService

router = APIRouter(
    prefix="/api/tasks",
    tags=["tasks"],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
TaskServiceDep = Annotated[TaskService, Depends(get_task_service)]


@router.get("", response_model=list[TaskRead])
def list_tasks(service: TaskServiceDep) -> list[dict[str, object]]:
    return service.list_tasks()


@router.post(
    "",
    response_model=TaskCreated,
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
)
def create_task(payload: TaskCreate, service: TaskServiceDep) -> dict[str, object]:
    task_id = service.create_task(
        user_id=payload.user_id,
        title=payload.title,
        description=payload.description,
        status=payload.resolved_status(),
    )
    return {"id": task_id, **payload.model_dump(exclude_unset=True)}


@router.put("/{task_id}", response_model=MessageResponse)
def update_task(task_id: int, payload: TaskUpdate, service: TaskServiceDep) -> dict[str, object]:
    fields = payload.supplied_fields()
    if not fields:
        raise APIError(
            status_code=400,
            message="Provide at least one of title, description, status.",
        )
    service.update_task(task_id=task_id, fields=fields)
    return {"message": "Task updated", "id": task_id}


@router.delete("/{task_id}", response_model=MessageResponse)
def delete_task(task_id: int, service: TaskServiceDep) -> dict[str, object]:
    service.delete_task(task_id=task_id)
    return {"message": "Task deleted", "id": task_id}
