"""User model."""

from sqlalchemy import Column, Enum, String

from refund_api.database import Base
from refund_api.models.enums import UserRole
from refund_api.models.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class User(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """User account, either an employee filing refunds or a manager reviewing them."""

    __tablename__ = "users"

    name = Column(String(255), nullable=False)
    # Stored lower-cased, so the unique index is case-insensitive
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        Enum(UserRole, name="user_role", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=UserRole.EMPLOYEE,
    )
