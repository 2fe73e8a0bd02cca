"""Pydantic schemas for API requests and responses."""

from refund_api.schemas.auth import AuthResponse, MessageResponse, SessionCreate, UploadResponse
from refund_api.schemas.pagination import Page, PageInfo, PageParams
from refund_api.schemas.refund import RefundCreate, RefundResponse, RefundUpdate
from refund_api.schemas.user import UserCreate, UserResponse, UserUpdate

__all__ = [
    "SessionCreate",
    "AuthResponse",
    "UploadResponse",
    "MessageResponse",
    "Page",
    "PageInfo",
    "PageParams",
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    "RefundCreate",
    "RefundUpdate",
    "RefundResponse",
]
