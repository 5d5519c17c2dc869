"""
Subscription Credit Model - Prepaid wash entitlement per customer
"""
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from carwash.core.timezone import utc_now
from carwash.db.database import Base


class SubscriptionCredit(Base):
    """Remaining credits for a customer; read as a booking gate"""

    __tablename__ = "subscription_credits"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4
    )

    sharetribe_user_id: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    credits_remaining: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    plan_label: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
        nullable=False
    )

    def __repr__(self) -> str:
        return f"<SubscriptionCredit {self.sharetribe_user_id} {self.credits_remaining} left>"
