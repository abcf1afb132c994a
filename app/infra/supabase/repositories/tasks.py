"""Task repository backed by Supabase (PostgREST)"""
from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID

from supabase import Client  # type: ignore

from app.features.tasks.domain import Task, TaskCreate, TaskPriority, TaskStatus, TaskUpdate

from .base import BaseRepository


def _deadline_order(task: Task):
    # deadline ascending, undated last, id as tie-break
    return (task.deadline is None, task.deadline or datetime.min.replace(tzinfo=timezone.utc), task.id)


class SupabaseTaskRepository(BaseRepository[Task, TaskCreate, TaskUpdate]):
    """Repository for task operations"""

    def __init__(self, client: Client):
        super().__init__(client, "tasks", Task)

    def _owned_query(self, user_id: UUID | str):
        return self._client.table(self._table_name).select("*").eq("user_id", str(user_id))

    def _ordered(self, query) -> List[Task]:
        response = query.order("deadline", desc=False).execute()
        return sorted(self._to_models(response.data), key=_deadline_order)

    async def find_by_user(self, user_id: UUID | str) -> List[Task]:
        return self._ordered(self._owned_query(user_id))

    async def find_by_user_and_status(self, user_id: UUID | str, status: TaskStatus) -> List[Task]:
        return self._ordered(self._owned_query(user_id).eq("status", status.value))

    async def find_by_user_and_priority(self, user_id: UUID | str, priority: TaskPriority) -> List[Task]:
        return self._ordered(self._owned_query(user_id).eq("priority", priority.value))

    async def find_overdue(self, user_id: UUID | str, now: datetime) -> List[Task]:
        query = (
            self._owned_query(user_id)
            .lt("deadline", now.isoformat())
            .neq("status", TaskStatus.DONE.value)
        )
        return self._ordered(query)

    async def find_due_between(self, user_id: UUID | str, start: datetime, end: datetime) -> List[Task]:
        query = (
            self._owned_query(user_id)
            .gte("deadline", start.isoformat())
            .lte("deadline", end.isoformat())
        )
        return self._ordered(query)

    async def user_exists(self, user_id: UUID | str) -> bool:
        try:
            UUID(str(user_id))
        except ValueError:
            return False
        response = self._client.table("user_profiles").select("id").eq("id", str(user_id)).execute()
        return bool(response.data)
