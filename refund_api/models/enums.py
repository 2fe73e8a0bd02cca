"""Enums for model fields."""

from enum import Enum


class UserRole(str, Enum):
    """Roles a user account can hold."""

    EMPLOYEE = "employee"
    MANAGER = "manager"

    def is_manager(self) -> bool:
        """Check if this role has cross-user access."""
        return self == UserRole.MANAGER


class RefundCategory(str, Enum):
    """Expense categories a refund can be filed under."""

    FOOD = "food"
    OTHERS = "others"
    SERVICES = "services"
    TRANSPORT = "transport"
    ACCOMMODATION = "accommodation"
