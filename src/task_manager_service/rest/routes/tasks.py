"""Task endpoints. Reads need any authenticated user; writes need an admin."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from task_manager_service.auth.deps import authenticate, authorize
from task_manager_service.db.deps import TaskUsecaseDep
from task_manager_service.domain.models import ROLE_ADMIN
from task_manager_service.rest.deps import AdminTaskRequest, json_body_doc
from task_manager_service.rest.schemas import (
    ERROR_RESPONSES,
    MessageResponse,
    TaskCreatedResponse,
    TaskRequest,
    TaskSchema,
)

router = APIRouter(
    prefix="/tasks",
    dependencies=[Depends(authenticate)],
    responses=ERROR_RESPONSES,
)


@router.get("", response_model=list[TaskSchema])
async def list_tasks(tasks: TaskUsecaseDep) -> list[TaskSchema]:
    return [TaskSchema.from_task(t) for t in await tasks.get_tasks()]


@router.get("/{task_id}", response_model=TaskSchema)
async def get_task(task_id: str, tasks: TaskUsecaseDep) -> TaskSchema:
    return TaskSchema.from_task(await tasks.get_task(task_id))


# Write bodies are parsed by AdminTaskRequest, after the admin check.
@router.post(
    "",
    response_model=TaskCreatedResponse,
    status_code=201,
    openapi_extra=json_body_doc(TaskRequest),
)
async def create_task(request: AdminTaskRequest, tasks: TaskUsecaseDep) -> TaskCreatedResponse:
    created = await tasks.create_task(request.to_task())
    return TaskCreatedResponse(
        message="Task created successfully", task=TaskSchema.from_task(created)
    )


@router.put(
    "/{task_id}",
    response_model=MessageResponse,
    openapi_extra=json_body_doc(TaskRequest),
)
async def update_task(
    task_id: str, request: AdminTaskRequest, tasks: TaskUsecaseDep
) -> MessageResponse:
    await tasks.update_task(task_id, request.to_task())
    return MessageResponse(message="Task updated successfully")


@router.delete(
    "/{task_id}",
    response_model=MessageResponse,
    dependencies=[authorize(ROLE_ADMIN)],
)
async def delete_task(task_id: str, tasks: TaskUsecaseDep) -> MessageResponse:
    await tasks.delete_task(task_id)
    return MessageResponse(message="Task deleted successfully")
