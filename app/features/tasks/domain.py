"""Domain models for the Tasks feature"""

from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_serializer, field_validator

from app.utils.datetime_helper import ensure_utc


class TaskStatus(str, Enum):
    """Task status enum"""
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


class TaskPriority(str, Enum):
    """Task priority enum, lowest first"""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


DEFAULT_STATUS = TaskStatus.TODO
DEFAULT_PRIORITY = TaskPriority.MEDIUM


class TaskBase(BaseModel):
    """Base task fields"""
    title: str = Field(..., max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    deadline: Optional[datetime] = None

    @field_validator("deadline")
    @classmethod
    def normalize_deadline(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value)


class TaskCreate(TaskBase):
    """Task creation model (what the repository inserts)"""
    user_id: UUID
    status: TaskStatus = DEFAULT_STATUS
    priority: TaskPriority = DEFAULT_PRIORITY


class TaskUpdate(BaseModel):
    """Task update model - only fields that were explicitly set are written"""
    title: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    deadline: Optional[datetime] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None

    @field_validator("deadline")
    @classmethod
    def normalize_deadline(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value)


class Task(TaskBase):
    """Complete task domain model"""
    id: int
    status: TaskStatus
    priority: TaskPriority
    user_id: UUID | str  # Accept both UUID and string
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @field_validator("created_at", "updated_at")
    @classmethod
    def normalize_timestamps(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value)

    @field_serializer("user_id")
    def serialize_user_id(self, user_id: UUID | str) -> str:
        """Serialize UUID to string for JSON"""
        return str(user_id)

    def is_owned_by(self, user_id: UUID | str) -> bool:
        return _same_user(self.user_id, user_id)


def _same_user(left: UUID | str, right: UUID | str) -> bool:
    try:
        return UUID(str(left)) == UUID(str(right))
    except ValueError:
        return False


def authorize(task: Task, caller_id: UUID | str) -> bool:
    """True if caller_id is the task's owner. The only access rule tasks have."""
    return task.is_owned_by(caller_id)
