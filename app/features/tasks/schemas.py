"""Request and response schemas for Tasks API"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from app.features.tasks.domain import TaskPriority, TaskStatus


class TaskRequest(BaseModel):
    """Body for creating or fully updating a task"""
    title: str = Field(..., max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    deadline: Optional[datetime] = None

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, value):
        # Strip before max_length is checked
        if isinstance(value, str):
            return value.strip()
        return value


class MessageResponse(BaseModel):
    """Plain confirmation message"""
    message: str
