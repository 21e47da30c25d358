"""Task CRUD endpoints."""

from fastapi import APIRouter, status

from tarefas.models.task import Task
from tarefas.server.dependencies import CurrentUser, TaskServiceDep
from tarefas.server.models import (
    TaskCreateRequest,
    TaskDeletedResponse,
    TaskEnvelope,
    TaskUpdateRequest,
)

router = APIRouter()


@router.get("", response_model=list[Task])
async def list_tasks(service: TaskServiceDep, _user: CurrentUser) -> list[Task]:
    """List all tasks."""
    return await service.list_tasks()


@router.get("/{task_id}", response_model=Task)
async def get_task(task_id: int, service: TaskServiceDep, _user: CurrentUser) -> Task:
    """Get task details."""
    return await service.get_task(task_id)


@router.post("", response_model=TaskEnvelope, status_code=status.HTTP_201_CREATED)
async def create_task(payload: TaskCreateRequest, service: TaskServiceDep, _user: CurrentUser) -> TaskEnvelope:
    """Create a new task."""
    task = await service.create_task(payload)
    return TaskEnvelope(task=task)


@router.put("/{task_id}", response_model=TaskEnvelope)
async def update_task(
    task_id: int, payload: TaskUpdateRequest, service: TaskServiceDep, _user: CurrentUser
) -> TaskEnvelope:
    """Update the fields present in the body."""
    task = await service.update_task(task_id, payload)
    return TaskEnvelope(task=task)


@router.delete("/{task_id}", response_model=TaskDeletedResponse)
async def delete_task(task_id: int, service: TaskServiceDep, _user: CurrentUser) -> TaskDeletedResponse:
    """Delete task permanently."""
    removed = await service.delete_task(task_id)
    return TaskDeletedResponse(removed=removed)
