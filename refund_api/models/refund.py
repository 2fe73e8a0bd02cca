"""Refund model."""

from sqlalchemy import Column, Enum, ForeignKey, Numeric, String, Uuid
from sqlalchemy.orm import relationship

from refund_api.database import Base
from refund_api.models.enums import RefundCategory
from refund_api.models.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class Refund(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Expense refund request filed by a user."""

    __tablename__ = "refunds"

    name = Column(String(255), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    category = Column(
        Enum(
            RefundCategory,
            name="refund_category",
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
    )
    filename = Column(String(255), nullable=False)  # Receipt stored by the uploads endpoint
    user_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)

    # Relationships
    user = relationship("User", backref="refunds")
