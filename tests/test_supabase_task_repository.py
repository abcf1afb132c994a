# tests/test_supabase_task_repository.py

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from app.features.tasks.domain import TaskCreate, TaskPriority, TaskStatus, TaskUpdate
from app.features.tasks.exceptions import TaskAccessDeniedError, UserNotFoundError
from app.features.tasks.schemas import TaskRequest
from app.features.tasks.service import TaskService
from app.infra.supabase.repositories import SupabaseTaskRepository

from .fakes import FakeSupabaseClient

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def fake_client() -> FakeSupabaseClient:
    return FakeSupabaseClient()


@pytest.fixture()
def repo(fake_client: FakeSupabaseClient) -> SupabaseTaskRepository:
    return SupabaseTaskRepository(fake_client)


def add_profile(client: FakeSupabaseClient) -> str:
    user_id = str(uuid4())
    client.tables.setdefault("user_profiles", []).append({"id": user_id})
    return user_id


@pytest.mark.asyncio
async def test_create_sends_json_payload(repo: SupabaseTaskRepository, fake_client: FakeSupabaseClient) -> None:
    user_id = uuid4()

    task = await repo.create(TaskCreate(title="x", user_id=user_id, deadline=NOW))

    row = fake_client.tables["tasks"][0]
    assert row["user_id"] == str(user_id)
    assert row["status"] == "TODO"
    assert row["priority"] == "MEDIUM"
    assert datetime.fromisoformat(row["deadline"]) == NOW
    assert task.id == row["id"]
    assert task.deadline == NOW


@pytest.mark.asyncio
async def test_find_by_user_orders_deadline_with_undated_last(repo: SupabaseTaskRepository) -> None:
    user_id = uuid4()
    undated = await repo.create(TaskCreate(title="undated", user_id=user_id))
    late = await repo.create(TaskCreate(title="late", user_id=user_id, deadline=NOW + timedelta(days=2)))
    early = await repo.create(TaskCreate(title="early", user_id=user_id, deadline=NOW))
    await repo.create(TaskCreate(title="foreign", user_id=uuid4(), deadline=NOW))

    tasks = await repo.find_by_user(user_id)

    assert [t.id for t in tasks] == [early.id, late.id, undated.id]


@pytest.mark.asyncio
async def test_status_and_priority_filters_use_list_ordering(repo: SupabaseTaskRepository) -> None:
    user_id = uuid4()
    fields = {"user_id": user_id, "status": TaskStatus.IN_PROGRESS, "priority": TaskPriority.HIGH}

    undated = await repo.create(TaskCreate(title="undated", **fields))
    later = await repo.create(TaskCreate(title="later", deadline=NOW + timedelta(days=4), **fields))
    tie_a = await repo.create(TaskCreate(title="tie a", deadline=NOW + timedelta(days=1), **fields))
    tie_b = await repo.create(TaskCreate(title="tie b", deadline=NOW + timedelta(days=1), **fields))
    await repo.create(TaskCreate(title="other", user_id=user_id, deadline=NOW + timedelta(days=1)))

    expected = [tie_a.id, tie_b.id, later.id, undated.id]

    by_status = await repo.find_by_user_and_status(user_id, TaskStatus.IN_PROGRESS)
    by_priority = await repo.find_by_user_and_priority(user_id, TaskPriority.HIGH)

    assert [t.id for t in by_status] == expected
    assert [t.id for t in by_priority] == expected


@pytest.mark.asyncio
async def test_overdue_query_filters_in_storage(repo: SupabaseTaskRepository, fake_client: FakeSupabaseClient) -> None:
    user_id = uuid4()
    late = await repo.create(TaskCreate(title="late", user_id=user_id, deadline=NOW - timedelta(hours=1)))
    await repo.create(
        TaskCreate(title="done", user_id=user_id, deadline=NOW - timedelta(hours=1), status=TaskStatus.DONE)
    )
    await repo.create(TaskCreate(title="future", user_id=user_id, deadline=NOW + timedelta(hours=1)))

    overdue = await repo.find_overdue(user_id, NOW)

    assert [t.id for t in overdue] == [late.id]
    assert fake_client.executed[-1].orders == ["deadline.asc"]


@pytest.mark.asyncio
async def test_update_and_delete(repo: SupabaseTaskRepository) -> None:
    user_id = uuid4()
    task = await repo.create(TaskCreate(title="x", user_id=user_id, priority=TaskPriority.LOW))

    updated = await repo.update(task.id, TaskUpdate(status=TaskStatus.IN_PROGRESS))

    assert updated is not None
    assert updated.status == TaskStatus.IN_PROGRESS
    assert updated.priority == TaskPriority.LOW
    assert await repo.update(999, TaskUpdate(status=TaskStatus.DONE)) is None

    assert await repo.delete(task.id) is True
    assert await repo.delete(task.id) is False
    assert await repo.find_by_id(task.id) is None


@pytest.mark.asyncio
async def test_service_runs_on_supabase_backend(repo: SupabaseTaskRepository, fake_client: FakeSupabaseClient) -> None:
    service = TaskService(repo)
    owner = add_profile(fake_client)
    stranger = add_profile(fake_client)

    with pytest.raises(UserNotFoundError):
        await service.create_task(str(uuid4()), TaskRequest(title="nobody"))

    task = await service.create_task(owner, TaskRequest(title="Ship report", priority=TaskPriority.HIGH))

    assert [t.id for t in await service.get_tasks_by_priority(owner, TaskPriority.HIGH)] == [task.id]
    with pytest.raises(TaskAccessDeniedError):
        await service.get_task(stranger, task.id)
    assert await repo.user_exists("not-a-uuid") is False
