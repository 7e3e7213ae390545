"""
Task API endpoints.

CRUD over the check definitions plus the move-up/move-down helper used to
reorder them.
"""

from typing import List
from fastapi import APIRouter, Depends, Path, Query, status
from dailyops.app.core.dependencies import get_task_service
from dailyops.app.core.exceptions import ResourceNotFoundError
from dailyops.app.models.task import Task
from dailyops.app.schemas.common import SuccessResponse
from dailyops.app.schemas.task import TaskCreate, TaskMoveRequest, TaskUpdate
from dailyops.app.services.task_service import TaskService

router = APIRouter(prefix="/tasks", tags=["Tasks"])


@router.get("", response_model=List[Task])
async def list_tasks(
    ordered: bool = Query(False, description="Sort by the order field"),
    tasks: TaskService = Depends(get_task_service)
):
    return await tasks.list_tasks(ordered=ordered)


@router.get("/{task_id}", response_model=Task)
async def get_task(
    task_id: str = Path(..., description="Task ID"),
    tasks: TaskService = Depends(get_task_service)
):
    task = await tasks.get_task(task_id)
    if not task:
        raise ResourceNotFoundError("Task", task_id)
    return task


@router.post("", response_model=Task, status_code=status.HTTP_201_CREATED)
async def create_task(
    task_data: TaskCreate,
    tasks: TaskService = Depends(get_task_service)
):
    """
    Create a check definition.

    Reports that already exist keep their task list; the new task shows up
    on reports created from now on.
    """
    return await tasks.create_task(task_data)


@router.put("/{task_id}", response_model=Task)
async def update_task(
    task_data: TaskUpdate,
    task_id: str = Path(..., description="Task ID"),
    tasks: TaskService = Depends(get_task_service)
):
    task = await tasks.update_task(task_id, task_data)
    if not task:
        raise ResourceNotFoundError("Task", task_id)
    return task


@router.post("/{task_id}/move", response_model=List[Task])
async def move_task(
    move: TaskMoveRequest,
    task_id: str = Path(..., description="Task ID"),
    tasks: TaskService = Depends(get_task_service)
):
    """Swap the task's order with its neighbour; returns tasks sorted by order."""
    return await tasks.move_task(task_id, move.direction)


@router.delete("/{task_id}", response_model=SuccessResponse, response_model_exclude_none=True)
async def delete_task(
    task_id: str = Path(..., description="Task ID"),
    tasks: TaskService = Depends(get_task_service)
):
    if not await tasks.delete_task(task_id):
        raise ResourceNotFoundError("Task", task_id)
    return SuccessResponse(success=True)
