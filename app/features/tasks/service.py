"""Business logic for Tasks"""

import logging
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from app.features.tasks.domain import (
    DEFAULT_PRIORITY,
    DEFAULT_STATUS,
    Task,
    TaskCreate,
    TaskPriority,
    TaskStatus,
    TaskUpdate,
    authorize,
)
from app.features.tasks.exceptions import (
    TaskAccessDeniedError,
    TaskNotFoundError,
    TaskValidationError,
    UserNotFoundError,
)
from app.features.tasks.repository import TaskRepository
from app.features.tasks.schemas import TaskRequest
from app.utils.datetime_helper import ensure_utc, utc_now

logger = logging.getLogger(__name__)


class TaskService:
    """Service layer for task business logic"""

    def __init__(self, repository: TaskRepository):
        self.repository = repository

    async def _get_owned_task(self, user_id: UUID | str, task_id: int) -> Task:
        """
        Load a task and check the caller owns it.

        Existence is checked before ownership so the two failures stay
        distinguishable.

        Raises:
            TaskNotFoundError: No task with this id
            TaskAccessDeniedError: Task belongs to someone else
        """
        task = await self.repository.find_by_id(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        if not authorize(task, user_id):
            logger.warning(f"User {user_id} denied access to task {task_id}")
            raise TaskAccessDeniedError(task_id)
        return task

    @staticmethod
    def _require_title(title: Optional[str]) -> str:
        if title is None or not title.strip():
            raise TaskValidationError("Title is required")
        return title.strip()

    async def list_tasks(self, user_id: UUID | str) -> List[Task]:
        """All tasks owned by the user, deadline ascending, undated tasks last"""
        return await self.repository.find_by_user(user_id)

    async def get_task(self, user_id: UUID | str, task_id: int) -> Task:
        return await self._get_owned_task(user_id, task_id)

    async def create_task(self, user_id: UUID | str, request: TaskRequest) -> Task:
        """
        Create a task owned by the caller.

        Omitted status and priority default to TODO and MEDIUM.

        Raises:
            TaskValidationError: Title missing or blank
            UserNotFoundError: Caller has no user record
        """
        title = self._require_title(request.title)

        if not await self.repository.user_exists(user_id):
            raise UserNotFoundError(str(user_id))

        data = TaskCreate(
            user_id=UUID(str(user_id)),
            title=title,
            description=request.description,
            deadline=request.deadline,
            status=request.status or DEFAULT_STATUS,
            priority=request.priority or DEFAULT_PRIORITY,
        )
        task = await self.repository.create(data)
        logger.info(f"Created task {task.id} for user {user_id}")
        return task

    async def update_task(self, user_id: UUID | str, task_id: int, request: TaskRequest) -> Task:
        """
        Full update of an owned task.

        Title and description are always overwritten (description may be
        cleared). Status, priority and deadline only change when supplied.
        """
        await self._get_owned_task(user_id, task_id)
        title = self._require_title(request.title)

        fields = {"title": title, "description": request.description}
        if request.status is not None:
            fields["status"] = request.status
        if request.priority is not None:
            fields["priority"] = request.priority
        if request.deadline is not None:
            fields["deadline"] = request.deadline

        task = await self.repository.update(task_id, TaskUpdate(**fields))
        if task is None:
            # Deleted between the ownership check and the write
            raise TaskNotFoundError(task_id)
        logger.info(f"Updated task {task_id} for user {user_id}")
        return task

    async def update_task_status(self, user_id: UUID | str, task_id: int, status: TaskStatus) -> Task:
        await self._get_owned_task(user_id, task_id)

        task = await self.repository.update(task_id, TaskUpdate(status=status))
        if task is None:
            raise TaskNotFoundError(task_id)
        logger.info(f"Task {task_id} status set to {status.value}")
        return task

    async def delete_task(self, user_id: UUID | str, task_id: int) -> None:
        await self._get_owned_task(user_id, task_id)

        if not await self.repository.delete(task_id):
            raise TaskNotFoundError(task_id)
        logger.info(f"Deleted task {task_id} for user {user_id}")

    async def get_tasks_by_status(self, user_id: UUID | str, status: TaskStatus) -> List[Task]:
        return await self.repository.find_by_user_and_status(user_id, status)

    async def get_tasks_by_priority(self, user_id: UUID | str, priority: TaskPriority) -> List[Task]:
        return await self.repository.find_by_user_and_priority(user_id, priority)

    async def get_overdue_tasks(self, user_id: UUID | str, now: Optional[datetime] = None) -> List[Task]:
        """Owned tasks with deadline before now that are not DONE"""
        current_time = ensure_utc(now) if now is not None else utc_now()
        return await self.repository.find_overdue(user_id, current_time)

    async def get_tasks_due_between(
        self,
        user_id: UUID | str,
        start: datetime,
        end: datetime
    ) -> List[Task]:
        """
        Owned tasks whose deadline falls in [start, end].

        Raises:
            TaskValidationError: start is after end
        """
        start_utc = ensure_utc(start)
        end_utc = ensure_utc(end)
        if start_utc > end_utc:
            raise TaskValidationError("start must not be after end")
        return await self.repository.find_due_between(user_id, start_utc, end_utc)
