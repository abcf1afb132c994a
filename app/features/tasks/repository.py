"""Task repository interface and its SQLAlchemy implementation"""

import logging
from datetime import datetime
from typing import List, Optional, Protocol
from uuid import UUID

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.task import Task as TaskORM
from app.db.models.user_profile import UserProfile as UserProfileORM
from app.features.tasks.domain import (
    Task,
    TaskCreate,
    TaskPriority,
    TaskStatus,
    TaskUpdate,
)

logger = logging.getLogger(__name__)


class TaskRepository(Protocol):
    """
    Storage collaborator for the task service.

    Every list query returns tasks ordered by deadline ascending, tasks
    without a deadline last, then by id.
    """

    async def find_by_id(self, task_id: int) -> Optional[Task]: ...

    async def find_by_user(self, user_id: UUID | str) -> List[Task]: ...

    async def find_by_user_and_status(self, user_id: UUID | str, status: TaskStatus) -> List[Task]: ...

    async def find_by_user_and_priority(self, user_id: UUID | str, priority: TaskPriority) -> List[Task]: ...

    async def find_overdue(self, user_id: UUID | str, now: datetime) -> List[Task]: ...

    async def find_due_between(self, user_id: UUID | str, start: datetime, end: datetime) -> List[Task]: ...

    async def create(self, data: TaskCreate) -> Task: ...

    async def update(self, task_id: int, data: TaskUpdate) -> Optional[Task]: ...

    async def delete(self, task_id: int) -> bool: ...

    async def user_exists(self, user_id: UUID | str) -> bool: ...


def _as_uuid(user_id: UUID | str) -> UUID:
    if isinstance(user_id, str):
        return UUID(user_id)
    return user_id


def _enum_values(data: dict) -> dict:
    """Enum members become their string values for the String columns"""
    return {
        key: value.value if isinstance(value, (TaskStatus, TaskPriority)) else value
        for key, value in data.items()
    }


class SQLAlchemyTaskRepository:
    """Repository for task operations using SQLAlchemy"""

    def __init__(self, db: AsyncSession):
        """
        Initialize the repository with a database session.

        Args:
            db: SQLAlchemy async database session
        """
        self.db = db

    def _owned_by(self, user_id: UUID | str, *conditions):
        stmt = select(TaskORM).where(and_(TaskORM.user_id == _as_uuid(user_id), *conditions))
        return stmt.order_by(
            TaskORM.deadline.is_(None),
            TaskORM.deadline.asc(),
            TaskORM.id.asc(),
        )

    async def _fetch_all(self, stmt) -> List[Task]:
        result = await self.db.execute(stmt)
        return [self._to_domain_model(orm_task) for orm_task in result.scalars().all()]

    async def _get_orm(self, task_id: int) -> Optional[TaskORM]:
        result = await self.db.execute(select(TaskORM).where(TaskORM.id == task_id))
        return result.scalar_one_or_none()

    async def find_by_id(self, task_id: int) -> Optional[Task]:
        orm_task = await self._get_orm(task_id)
        if orm_task is None:
            return None
        return self._to_domain_model(orm_task)

    async def find_by_user(self, user_id: UUID | str) -> List[Task]:
        return await self._fetch_all(self._owned_by(user_id))

    async def find_by_user_and_status(self, user_id: UUID | str, status: TaskStatus) -> List[Task]:
        return await self._fetch_all(self._owned_by(user_id, TaskORM.status == status.value))

    async def find_by_user_and_priority(self, user_id: UUID | str, priority: TaskPriority) -> List[Task]:
        return await self._fetch_all(self._owned_by(user_id, TaskORM.priority == priority.value))

    async def find_overdue(self, user_id: UUID | str, now: datetime) -> List[Task]:
        """Tasks whose deadline is before now and that are not DONE"""
        stmt = self._owned_by(
            user_id,
            TaskORM.deadline < now,
            TaskORM.status != TaskStatus.DONE.value,
        )
        return await self._fetch_all(stmt)

    async def find_due_between(self, user_id: UUID | str, start: datetime, end: datetime) -> List[Task]:
        """Tasks with start <= deadline <= end"""
        stmt = self._owned_by(
            user_id,
            TaskORM.deadline >= start,
            TaskORM.deadline <= end,
        )
        return await self._fetch_all(stmt)

    async def create(self, data: TaskCreate) -> Task:
        orm_task = TaskORM(**_enum_values(data.model_dump()))
        self.db.add(orm_task)
        await self.db.commit()
        await self.db.refresh(orm_task)
        return self._to_domain_model(orm_task)

    async def update(self, task_id: int, data: TaskUpdate) -> Optional[Task]:
        orm_task = await self._get_orm(task_id)
        if orm_task is None:
            return None

        for key, value in _enum_values(data.model_dump(exclude_unset=True)).items():
            setattr(orm_task, key, value)

        await self.db.commit()
        await self.db.refresh(orm_task)
        return self._to_domain_model(orm_task)

    async def delete(self, task_id: int) -> bool:
        orm_task = await self._get_orm(task_id)
        if orm_task is None:
            return False

        await self.db.delete(orm_task)
        await self.db.commit()
        return True

    async def user_exists(self, user_id: UUID | str) -> bool:
        try:
            uid = _as_uuid(user_id)
        except ValueError:
            return False
        result = await self.db.execute(select(UserProfileORM.id).where(UserProfileORM.id == uid))
        return result.scalar_one_or_none() is not None

    def _to_domain_model(self, orm_task: TaskORM) -> Task:
        """
        Convert SQLAlchemy ORM model to Pydantic domain model.

        Args:
            orm_task: SQLAlchemy Task ORM object

        Returns:
            Pydantic Task domain model
        """
        return Task.model_validate(orm_task)
