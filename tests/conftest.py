# tests/conftest.py

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from datetime import datetime, timedelta, timezone
from pathlib import Path
from uuid import uuid4

import httpx
import pytest
import pytest_asyncio
from jose import jwt
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from app import config
from app.db.models.user_profile import UserProfile as UserProfileORM
from app.db.session import build_engine, build_session_factory, create_tables, get_db
from app.features.tasks.repository import SQLAlchemyTaskRepository
from app.features.tasks.service import TaskService
from app.main import app as fastapi_app

TEST_JWT_SECRET = "test-secret-for-hs256-tokens"


def make_token(user_id: str, *, expires_in: timedelta = timedelta(hours=1), audience: str = "authenticated") -> str:
    now = datetime.now(timezone.utc)
    claims = {
        "sub": user_id,
        "aud": audience,
        "iat": int(now.timestamp()),
        "exp": int((now + expires_in).timestamp()),
    }
    return jwt.encode(claims, TEST_JWT_SECRET, algorithm="HS256")


def auth_headers(user_id: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(user_id)}"}


@pytest.fixture(autouse=True)
def auth_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Verify tokens with the shared test secret and keep the SQL backend."""
    monkeypatch.setattr(config, "SUPABASE_JWT_SECRET", TEST_JWT_SECRET)
    monkeypatch.setattr(config, "TASK_STORAGE_BACKEND", "sqlalchemy")


@pytest_asyncio.fixture()
async def engine(tmp_path: Path) -> AsyncIterator[AsyncEngine]:
    test_engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'tasks.sqlite3'}")
    await create_tables(test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture()
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return build_session_factory(engine)


@pytest_asyncio.fixture()
async def session(session_factory: async_sessionmaker[AsyncSession]) -> AsyncIterator[AsyncSession]:
    async with session_factory() as db:
        yield db


@pytest.fixture()
def service(session: AsyncSession) -> TaskService:
    return TaskService(SQLAlchemyTaskRepository(session))


@pytest.fixture()
def make_user(session_factory: async_sessionmaker[AsyncSession]) -> Callable[[], Awaitable[str]]:
    """Insert a user profile and return its id as a string."""

    async def _make_user() -> str:
        user_id = uuid4()
        async with session_factory() as db:
            db.add(UserProfileORM(id=user_id, name="tester"))
            await db.commit()
        return str(user_id)

    return _make_user


@pytest_asyncio.fixture()
async def client(session_factory: async_sessionmaker[AsyncSession]) -> AsyncIterator[httpx.AsyncClient]:
    async def override_get_db() -> AsyncIterator[AsyncSession]:
        async with session_factory() as db:
            yield db

    fastapi_app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=fastapi_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http:
        yield http
    fastapi_app.dependency_overrides.clear()
