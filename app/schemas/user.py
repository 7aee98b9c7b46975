"""User schemas.

Input shapes (``UserCreate``, ``UserUpdate``) are kept apart from the output
shape (``UserResponse``) so that only allow-listed fields are ever written and
secrets such as the password hash never leave the service.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, EmailStr, Field, ValidationInfo, field_validator
from sqlalchemy import inspect

from app.core.security import PASSWORD_MAX_BYTES
from app.models.user import User, UserStatus
from app.schemas.base import BaseSchema, PaginationLinks, PaginationMeta
from app.schemas.user_profile import UserProfileResponse, UserProfileUpdate

PASSWORD_MIN_LENGTH = 8
EMAIL_MAX_LENGTH = 255


def _normalize_email(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    value = value.strip().lower()
    if len(value) > EMAIL_MAX_LENGTH:
        raise ValueError(f"The email may not be greater than {EMAIL_MAX_LENGTH} characters")
    return value


def _check_password_bytes(value: Optional[str]) -> Optional[str]:
    if value is not None and len(value.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"The password may not be greater than {PASSWORD_MAX_BYTES} bytes")
    return value


class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH)
    password_confirmation: str

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("The name field is required")
        return value

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return _normalize_email(value)

    @field_validator("password")
    @classmethod
    def password_fits_hash(cls, value: str) -> str:
        return _check_password_bytes(value)

    @field_validator("password_confirmation")
    @classmethod
    def passwords_match(cls, value: str, info: ValidationInfo) -> str:
        if "password" in info.data and value != info.data["password"]:
            raise ValueError("The password confirmation does not match")
        return value


class UserUpdate(BaseModel):
    """Partial update; omitted fields keep their stored values."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=PASSWORD_MIN_LENGTH)
    password_confirmation: Optional[str] = Field(None, validate_default=True)
    profile: Optional[UserProfileUpdate] = None

    @field_validator("name", "email", "password")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("This field may not be null")
        return value

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return _normalize_email(value)

    @field_validator("password")
    @classmethod
    def password_fits_hash(cls, value: str) -> str:
        return _check_password_bytes(value)

    @field_validator("password_confirmation")
    @classmethod
    def passwords_match(cls, value: Optional[str], info: ValidationInfo) -> Optional[str]:
        if info.data.get("password") is not None and value != info.data["password"]:
            raise ValueError("The password confirmation does not match")
        return value


class PostSummary(BaseSchema):
    id: int
    title: str
    created_at: datetime


class UserResponse(BaseModel):
    """Public representation of a user.

    ``profile`` and ``posts`` are only present when they were eager-loaded.
    """

    id: int
    name: str
    email: EmailStr
    email_verified_at: Optional[datetime] = None
    status: UserStatus
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None
    profile: Optional[UserProfileResponse] = None
    posts: Optional[List[PostSummary]] = None

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        unloaded = inspect(user).unloaded
        data: Dict[str, Any] = {
            "id": user.id,
            "name": user.name,
            "email": user.email,
            "email_verified_at": user.email_verified_at,
            "status": user.status,
            "created_at": user.created_at,
            "updated_at": user.updated_at,
            "deleted_at": user.deleted_at,
        }
        if "profile" not in unloaded:
            data["profile"] = (
                UserProfileResponse.model_validate(user.profile) if user.profile is not None else None
            )
        if "posts" not in unloaded:
            data["posts"] = [PostSummary.model_validate(post) for post in user.posts]
        return cls.model_validate(data)

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_unset=True)


class UserListResponse(BaseModel):
    data: List[UserResponse]
    links: PaginationLinks
    meta: PaginationMeta
