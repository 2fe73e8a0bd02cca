"""Refund schemas."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from refund_api.models.enums import RefundCategory


class RefundCreate(BaseModel):
    """Create a refund request."""

    name: str = Field(..., min_length=3, max_length=255)
    amount: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    category: RefundCategory
    filename: str = Field(..., min_length=1, max_length=255)


class RefundUpdate(BaseModel):
    """Partial refund update."""

    name: str | None = Field(None, min_length=3, max_length=255)
    amount: Decimal | None = Field(None, gt=0, max_digits=10, decimal_places=2)
    category: RefundCategory | None = None
    filename: str | None = Field(None, min_length=1, max_length=255)


class RefundResponse(BaseModel):
    """Refund response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    amount: Decimal
    category: RefundCategory
    filename: str
    user_id: UUID
    created_at: datetime
    updated_at: datetime
