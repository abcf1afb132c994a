"""SQLAlchemy ORM model for tasks table"""

from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey, Uuid
from sqlalchemy.sql import func

from app.db.base import Base


class Task(Base):
    """
    SQLAlchemy ORM model for the tasks table.
    """
    __tablename__ = "tasks"

    # Primary key
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # Task information
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    deadline = Column(DateTime(timezone=True), nullable=True, index=True)

    # Status / priority stored as their enum string values
    status = Column(String, nullable=False, default="TODO")
    priority = Column(String, nullable=False, default="MEDIUM")

    # Owner; never reassigned after insert
    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("user_profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # Timestamps
    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )
    updated_at = Column(
        DateTime(timezone=True),
        onupdate=func.now(),
        nullable=True
    )

    def __repr__(self) -> str:
        return f"<Task(id={self.id}, title='{self.title}', status='{self.status}')>"
