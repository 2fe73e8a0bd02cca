"""User schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from refund_api.models.enums import UserRole


def normalize_email(email: str) -> str:
    """Case-fold an email address so comparisons and uniqueness ignore case."""
    return email.strip().lower()


class UserCreate(BaseModel):
    """User registration request."""

    name: str = Field(..., min_length=2, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    role: UserRole = UserRole.EMPLOYEE

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return normalize_email(value)


class UserUpdate(BaseModel):
    """Partial user update; only the fields that are sent are considered."""

    name: str | None = Field(None, min_length=2, max_length=255)
    email: EmailStr | None = None
    password: str | None = Field(None, min_length=6, max_length=128)
    role: UserRole | None = None

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str | None) -> str | None:
        return normalize_email(value) if value is not None else None


class UserResponse(BaseModel):
    """Public user projection. The password hash is never exposed."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str
    role: UserRole
    created_at: datetime
    updated_at: datetime
