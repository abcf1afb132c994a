"""Tasks API endpoints"""

import logging
from datetime import datetime
from typing import List, NoReturn

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app import config
from app.db import get_db
from app.middleware.auth import get_current_user_id
from app.features.tasks.domain import Task, TaskPriority, TaskStatus
from app.features.tasks.exceptions import (
    TaskAccessDeniedError,
    TaskNotFoundError,
    TaskServiceError,
    TaskValidationError,
    UserNotFoundError,
)
from app.features.tasks.repository import SQLAlchemyTaskRepository, TaskRepository
from app.features.tasks.schemas import MessageResponse, TaskRequest
from app.features.tasks.service import TaskService

logger = logging.getLogger(__name__)


router = APIRouter(prefix="/api/tasks", tags=["tasks"])


_ERROR_STATUS = {
    TaskValidationError: 400,
    UserNotFoundError: 400,
    TaskNotFoundError: 404,
    TaskAccessDeniedError: 403,
}


def _raise_http(error: TaskServiceError) -> NoReturn:
    status_code = _ERROR_STATUS.get(type(error), 400)
    raise HTTPException(status_code=status_code, detail=str(error))


def get_task_repository(db: AsyncSession = Depends(get_db)) -> TaskRepository:
    """Pick the storage backend configured by TASK_STORAGE_BACKEND"""
    if config.TASK_STORAGE_BACKEND == "supabase":
        from app.infra.supabase.client import get_supabase_client
        from app.infra.supabase.repositories import SupabaseTaskRepository

        return SupabaseTaskRepository(get_supabase_client())
    return SQLAlchemyTaskRepository(db)


def get_task_service(repository: TaskRepository = Depends(get_task_repository)) -> TaskService:
    return TaskService(repository)


@router.get("", response_model=List[Task])
async def get_all_tasks(
    user_id: str = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service)
):
    """
    Get all tasks of the authenticated user.

    Ordered by deadline ascending; tasks without a deadline come last.
    """
    try:
        return await service.list_tasks(user_id)
    except Exception as e:
        logger.error(f"Failed to fetch tasks: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to fetch tasks: {str(e)}")


@router.post("", response_model=Task)
async def create_task(
    request: TaskRequest,
    user_id: str = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service)
):
    """
    Create a task owned by the authenticated user.

    Status defaults to TODO and priority to MEDIUM when omitted.

    Raises:
        400: Title missing/blank, or the user has no profile
    """
    try:
        return await service.create_task(user_id, request)
    except TaskServiceError as e:
        _raise_http(e)
    except Exception as e:
        logger.error(f"Failed to create task: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to create task: {str(e)}")


@router.get("/overdue", response_model=List[Task])
async def get_overdue_tasks(
    user_id: str = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service)
):
    """Tasks past their deadline that are not DONE"""
    try:
        return await service.get_overdue_tasks(user_id)
    except Exception as e:
        logger.error(f"Failed to fetch overdue tasks: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to fetch overdue tasks: {str(e)}")


@router.get("/due", response_model=List[Task])
async def get_tasks_due_between(
    start: datetime = Query(..., description="Inclusive lower bound for the deadline"),
    end: datetime = Query(..., description="Inclusive upper bound for the deadline"),
    user_id: str = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service)
):
    """Tasks whose deadline falls between start and end (inclusive)"""
    try:
        return await service.get_tasks_due_between(user_id, start, end)
    except TaskServiceError as e:
        _raise_http(e)
    except Exception as e:
        logger.error(f"Failed to fetch tasks due between {start} and {end}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to fetch tasks: {str(e)}")


@router.get("/status/{status}", response_model=List[Task])
async def get_tasks_by_status(
    status: TaskStatus,
    user_id: str = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service)
):
    try:
        return await service.get_tasks_by_status(user_id, status)
    except Exception as e:
        logger.error(f"Failed to fetch tasks with status {status.value}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to fetch tasks: {str(e)}")


@router.get("/priority/{priority}", response_model=List[Task])
async def get_tasks_by_priority(
    priority: TaskPriority,
    user_id: str = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service)
):
    try:
        return await service.get_tasks_by_priority(user_id, priority)
    except Exception as e:
        logger.error(f"Failed to fetch tasks with priority {priority.value}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to fetch tasks: {str(e)}")


@router.get("/{task_id}", response_model=Task)
async def get_task(
    task_id: int,
    user_id: str = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service)
):
    """
    Get a single task.

    Raises:
        404: Task not found
        403: Task belongs to another user
    """
    try:
        return await service.get_task(user_id, task_id)
    except TaskServiceError as e:
        _raise_http(e)
    except Exception as e:
        logger.error(f"Failed to fetch task {task_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to fetch task: {str(e)}")


@router.put("/{task_id}", response_model=Task)
async def update_task(
    task_id: int,
    request: TaskRequest,
    user_id: str = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service)
):
    """
    Replace title and description; status, priority and deadline change only
    when present in the body.

    Raises:
        400: Title missing/blank
        404: Task not found
        403: Task belongs to another user
    """
    try:
        return await service.update_task(user_id, task_id, request)
    except TaskServiceError as e:
        _raise_http(e)
    except Exception as e:
        logger.error(f"Failed to update task {task_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to update task: {str(e)}")


@router.patch("/{task_id}/status", response_model=Task)
async def update_task_status(
    task_id: int,
    status: TaskStatus = Query(...),
    user_id: str = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service)
):
    """Set only the status of a task"""
    try:
        return await service.update_task_status(user_id, task_id, status)
    except TaskServiceError as e:
        _raise_http(e)
    except Exception as e:
        logger.error(f"Failed to update status of task {task_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to update task status: {str(e)}")


@router.delete("/{task_id}", response_model=MessageResponse)
async def delete_task(
    task_id: int,
    user_id: str = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service)
):
    try:
        await service.delete_task(user_id, task_id)
    except TaskServiceError as e:
        _raise_http(e)
    except Exception as e:
        logger.error(f"Failed to delete task {task_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to delete task: {str(e)}")

    return MessageResponse(message="Task deleted successfully!")
