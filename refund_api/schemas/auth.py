"""Authentication schemas."""

from pydantic import BaseModel, EmailStr, Field

from refund_api.schemas.user import UserResponse


class SessionCreate(BaseModel):
    """Login request."""

    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)


class AuthResponse(BaseModel):
    """Authentication response with token and user info."""

    access_token: str
    token_type: str = "bearer"  # noqa: S105
    user: UserResponse


class UploadResponse(BaseModel):
    """Stored receipt file name, to be sent as a refund's ``filename``."""

    filename: str


class MessageResponse(BaseModel):
    """Informational response, e.g. an update that changed nothing."""

    message: str
