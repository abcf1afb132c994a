"""User profile endpoints for the authenticated caller"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import get_db
from app.middleware.auth import get_current_user_id
from app.features.users.domain import UserProfile, UserProfileCreate
from app.features.users.repository import UserProfileRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/me", response_model=UserProfile)
async def get_my_profile(
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Get the authenticated user's profile"""
    profile = await UserProfileRepository(db).find_by_id(user_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="User not found")
    return profile


@router.post("/me", response_model=UserProfile)
async def create_my_profile(
    request: Optional[UserProfileCreate] = None,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """
    Create the authenticated user's profile if it does not exist yet.

    Idempotent: an existing profile is returned unchanged.
    """
    name = request.name if request else None
    return await UserProfileRepository(db).get_or_create(user_id, name)
