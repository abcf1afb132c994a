"""SQLAlchemy repository for user profiles"""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.user_profile import UserProfile as UserProfileORM
from app.features.users.domain import UserProfile

logger = logging.getLogger(__name__)


class UserProfileRepository:
    """Repository for user profile operations using SQLAlchemy"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_id(self, user_id: UUID | str) -> Optional[UserProfile]:
        if isinstance(user_id, str):
            user_id = UUID(user_id)

        result = await self.db.execute(select(UserProfileORM).where(UserProfileORM.id == user_id))
        orm_profile = result.scalar_one_or_none()
        if orm_profile is None:
            return None
        return UserProfile.model_validate(orm_profile)

    async def create(self, user_id: UUID | str, name: Optional[str] = None) -> UserProfile:
        if isinstance(user_id, str):
            user_id = UUID(user_id)

        orm_profile = UserProfileORM(id=user_id, name=name)
        self.db.add(orm_profile)
        await self.db.commit()
        await self.db.refresh(orm_profile)
        logger.info(f"Created user profile {user_id}")
        return UserProfile.model_validate(orm_profile)

    async def get_or_create(self, user_id: UUID | str, name: Optional[str] = None) -> UserProfile:
        """Return the existing profile, creating it first if needed"""
        existing = await self.find_by_id(user_id)
        if existing is not None:
            return existing
        return await self.create(user_id, name)
