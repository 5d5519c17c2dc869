"""
Availability Model - Bookable blocks generated from washer schedules
"""
import uuid
from datetime import date, datetime, time
from enum import Enum
from typing import TYPE_CHECKING, Optional

from sqlalchemy import CheckConstraint, Date, DateTime, ForeignKey, Index, Integer, String, Time, Enum as SQLEnum
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from carwash.core.timezone import utc_now
from carwash.db.database import Base

if TYPE_CHECKING:
    from carwash.models.washer import Washer


class AvailabilityStatus(str, Enum):
    """Whether a block can take bookings"""
    OPEN = "open"
    CLOSED = "closed"


class WasherAvailability(Base):
    """
    One technician, one date, one time window, with a booking capacity.
    Rows for a washer/month are replaced wholesale when the schedule is saved.
    """

    __tablename__ = "washer_availability"
    __table_args__ = (
        CheckConstraint(
            "current_bookings >= 0 AND current_bookings <= max_bookings",
            name="ck_washer_availability_capacity",
        ),
        Index("ix_washer_availability_slot", "location", "service_date", "start_time", "end_time"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4
    )

    washer_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("washers.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    service_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)

    # ZIP code of the service area
    location: Mapped[str] = mapped_column(String(16), nullable=False)

    status: Mapped[AvailabilityStatus] = mapped_column(
        SQLEnum(AvailabilityStatus, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=AvailabilityStatus.OPEN
    )

    max_bookings: Mapped[int] = mapped_column(Integer, nullable=False, default=3)
    current_bookings: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False
    )

    washer: Mapped[Optional["Washer"]] = relationship(
        "Washer",
        lazy="noload"
    )

    @property
    def remaining_capacity(self) -> int:
        return max(0, (self.max_bookings or 0) - (self.current_bookings or 0))

    @property
    def has_open_capacity(self) -> bool:
        """Open status and at least one booking left"""
        return (
            self.status == AvailabilityStatus.OPEN and
            (self.current_bookings or 0) < (self.max_bookings or 0)
        )

    def __repr__(self) -> str:
        return (
            f"<WasherAvailability {self.washer_id} {self.service_date} "
            f"{self.start_time}-{self.end_time} {self.current_bookings}/{self.max_bookings}>"
        )
