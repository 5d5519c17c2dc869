"""
Wash Model - Customer bookings
"""
import uuid
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text, Enum as SQLEnum
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from carwash.core.timezone import utc_now
from carwash.db.database import Base

if TYPE_CHECKING:
    from carwash.models.washer import Washer


class WashStatus(str, Enum):
    """Status of a wash"""
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


class Wash(Base):
    """
    A booked wash. Created by the booking engine (which reserves an
    availability block) or by an admin (which does not).
    """

    __tablename__ = "washes"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4
    )

    # Customer identifier from the marketplace account
    sharetribe_user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    subscription_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    washer_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("washers.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )

    status: Mapped[WashStatus] = mapped_column(
        SQLEnum(WashStatus, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=WashStatus.SCHEDULED,
        index=True
    )

    scheduled_start: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True
    )
    scheduled_end: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True
    )

    # ZIP code of the service area
    location_id: Mapped[str] = mapped_column(String(16), nullable=False, index=True)

    vehicle_count: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    special_instructions: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    late_cancellation_fee_applied: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
        nullable=False
    )

    washer: Mapped[Optional["Washer"]] = relationship(
        "Washer",
        lazy="noload"
    )

    def __repr__(self) -> str:
        return f"<Wash {self.id} ({self.status.value}) at {self.scheduled_start}>"
