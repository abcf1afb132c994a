"""SQLAlchemy ORM model for user_profiles table"""

from sqlalchemy import Column, DateTime, Text, Uuid
from sqlalchemy.sql import func

from app.db.base import Base


class UserProfile(Base):
    """
    SQLAlchemy ORM model for the user_profiles table.
    One row per identity known to the auth provider; tasks hang off it.
    """
    __tablename__ = "user_profiles"

    # Primary key (same value as the token's 'sub' claim)
    id = Column(Uuid(as_uuid=True), primary_key=True, index=True)

    name = Column(Text, nullable=True)

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    def __repr__(self) -> str:
        return f"<UserProfile(id={self.id}, name='{self.name}')>"
