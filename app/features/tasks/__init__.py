"""Tasks feature module"""

from app.features.tasks.api import router
from app.features.tasks.repository import SQLAlchemyTaskRepository, TaskRepository
from app.features.tasks.service import TaskService
from app.features.tasks.domain import (
    Task,
    TaskCreate,
    TaskUpdate,
    TaskStatus,
    TaskPriority,
    authorize,
)
from app.features.tasks.exceptions import (
    TaskServiceError,
    TaskValidationError,
    TaskNotFoundError,
    TaskAccessDeniedError,
    UserNotFoundError,
)

__all__ = [
    "router",
    "SQLAlchemyTaskRepository",
    "TaskRepository",
    "TaskService",
    "Task",
    "TaskCreate",
    "TaskUpdate",
    "TaskStatus",
    "TaskPriority",
    "authorize",
    "TaskServiceError",
    "TaskValidationError",
    "TaskNotFoundError",
    "TaskAccessDeniedError",
    "UserNotFoundError",
]
