"""SQLAlchemy models."""

from refund_api.models.enums import RefundCategory, UserRole
from refund_api.models.refund import Refund
from refund_api.models.user import User

__all__ = [
    "User",
    "Refund",
    "UserRole",
    "RefundCategory",
]
