"""
Schedule Models - Washer weekly template and date exceptions
"""
import uuid
from datetime import date, datetime, time
from enum import Enum
from typing import Optional

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Integer, String, Time, UniqueConstraint, Enum as SQLEnum
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from carwash.core.timezone import utc_now
from carwash.db.database import Base


class ApprovalStatus(str, Enum):
    """Review state of a schedule exception"""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class WasherDefaultWeek(Base):
    """
    Recurring weekly template, one row per working weekday.
    A weekday with no row is a day off.
    """

    __tablename__ = "washer_default_week"
    __table_args__ = (
        UniqueConstraint("washer_id", "weekday", name="uq_washer_default_week_washer_weekday"),
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

    # 0 = Sunday, 6 = Saturday
    weekday: Mapped[int] = mapped_column(Integer, nullable=False)

    is_working: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    start_time: Mapped[Optional[time]] = mapped_column(Time, nullable=True)
    end_time: Mapped[Optional[time]] = mapped_column(Time, nullable=True)
    zip: Mapped[str] = mapped_column(String(16), nullable=False)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
        nullable=False
    )

    def __repr__(self) -> str:
        return f"<WasherDefaultWeek {self.washer_id} Day {self.weekday} {self.start_time}-{self.end_time}>"


class WasherScheduleException(Base):
    """Date-specific override of the weekly template (day off or custom window)"""

    __tablename__ = "washer_schedule_exceptions"
    __table_args__ = (
        UniqueConstraint("washer_id", "service_date", name="uq_washer_schedule_exceptions_washer_date"),
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

    is_day_off: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    start_time: Mapped[Optional[time]] = mapped_column(Time, nullable=True)
    end_time: Mapped[Optional[time]] = mapped_column(Time, nullable=True)
    zip: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)

    approval_status: Mapped[ApprovalStatus] = mapped_column(
        SQLEnum(ApprovalStatus, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=ApprovalStatus.APPROVED
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
        nullable=False
    )

    def __repr__(self) -> str:
        state = "off" if self.is_day_off else f"{self.start_time}-{self.end_time}"
        return f"<WasherScheduleException {self.washer_id} {self.service_date} {state} ({self.approval_status.value})>"
