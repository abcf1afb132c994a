"""User profiles feature module"""

from app.features.users.api import router
from app.features.users.domain import UserProfile, UserProfileCreate
from app.features.users.repository import UserProfileRepository

__all__ = [
    "router",
    "UserProfile",
    "UserProfileCreate",
    "UserProfileRepository",
]
