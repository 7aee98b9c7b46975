"""User profile schemas.

This module contains Pydantic models for user profile data validation and serialization.
"""

from datetime import date, datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.user_profile import GenderType
from app.schemas.base import BaseSchema


class UserProfileUpdate(BaseModel):
    """Schema for creating or updating the profile attached to a user.

    All fields are optional to support partial updates; only the fields sent
    by the client are written.
    """

    model_config = ConfigDict(extra="forbid")

    phone: Optional[str] = Field(None, max_length=20)
    birth_date: Optional[date] = None
    gender: Optional[GenderType] = None
    bio: Optional[str] = None
    website: Optional[str] = Field(None, max_length=255)
    address_line_1: Optional[str] = Field(None, max_length=255)
    address_line_2: Optional[str] = Field(None, max_length=255)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    postal_code: Optional[str] = Field(None, max_length=20)
    country: Optional[str] = Field(None, min_length=2, max_length=2)
    preferences: Optional[Dict[str, Any]] = None
    is_public: Optional[bool] = None
    accepts_marketing: Optional[bool] = None
    timezone: Optional[str] = Field(None, max_length=50)
    locale: Optional[str] = Field(None, max_length=10)

    @field_validator("country")
    @classmethod
    def normalize_country(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        if not value.isalpha():
            raise ValueError("Country must be an ISO 3166-1 alpha-2 code")
        return value.upper()

    @field_validator("website")
    @classmethod
    def validate_website(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.startswith(("http://", "https://")):
            raise ValueError("Website must be an http(s) URL")
        return value

    @field_validator("is_public", "accepts_marketing", "timezone", "locale")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("This field may not be null")
        return value


class UserProfileResponse(BaseSchema):
    """Schema for user profile API responses."""

    user_id: int
    phone: Optional[str] = None
    birth_date: Optional[date] = None
    gender: Optional[GenderType] = None
    bio: Optional[str] = None
    website: Optional[str] = None
    address_line_1: Optional[str] = None
    address_line_2: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None
    preferences: Optional[Dict[str, Any]] = None
    is_public: bool
    accepts_marketing: bool
    timezone: str
    locale: str
    is_complete: bool
    created_at: datetime
    updated_at: datetime
