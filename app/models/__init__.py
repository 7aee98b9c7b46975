"""Database models."""

# Import all models here to ensure they're recognized by SQLAlchemy
from app.models.permission import Capability, UserPermission
from app.models.post import Post
from app.models.user import User, UserStatus
from app.models.user_profile import GenderType, UserProfile

__all__ = [
    "User",
    "UserStatus",
    "UserProfile",
    "GenderType",
    "Post",
    "UserPermission",
    "Capability",
]
