"""User Profile domain model"""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_serializer


class UserProfileCreate(BaseModel):
    """Body for bootstrapping the caller's profile"""
    name: Optional[str] = Field(None, max_length=200)


class UserProfile(BaseModel):
    """Complete user profile model from database"""
    id: UUID | str
    name: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True

    @field_serializer('id')
    def serialize_id(self, id: UUID | str) -> str:
        return str(id)
