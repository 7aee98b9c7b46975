from app.schemas.auth import Token
from app.schemas.base import ApiResponse, PaginationLinks, PaginationMeta
from app.schemas.user import UserCreate, UserListResponse, UserResponse, UserUpdate
from app.schemas.user_profile import UserProfileResponse, UserProfileUpdate

__all__ = [
    "ApiResponse",
    "PaginationLinks",
    "PaginationMeta",
    "Token",
    "UserCreate",
    "UserListResponse",
    "UserProfileResponse",
    "UserProfileUpdate",
    "UserResponse",
    "UserUpdate",
]
