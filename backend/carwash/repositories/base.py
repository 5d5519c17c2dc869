"""Protocols for the store operations the scheduling services depend on.

Services receive these through FastAPI dependencies, so tests can hand them an
in-memory implementation instead of a database session.
"""
from datetime import date, datetime, time
from typing import Dict, Iterable, List, Optional, Protocol, Sequence
from uuid import UUID

from carwash.models.availability import WasherAvailability
from carwash.models.schedule import WasherDefaultWeek, WasherScheduleException
from carwash.models.subscription_credit import SubscriptionCredit
from carwash.models.wash import Wash
from carwash.schemas.schedule import ScheduleExceptionIn, WeeklyTemplateRowIn


class ScheduleStore(Protocol):
    """Weekly template and exception rows of a washer."""

    async def list_default_week(self, washer_id: UUID) -> List[WasherDefaultWeek]:
        ...

    async def list_exceptions(
        self, washer_id: UUID, start_date: date, end_date: date
    ) -> List[WasherScheduleException]:
        ...

    async def upsert_default_week(
        self, washer_id: UUID, rows: Sequence[WeeklyTemplateRowIn]
    ) -> None:
        """Insert or update on (washer_id, weekday)."""
        ...

    async def delete_default_weekdays(self, washer_id: UUID, weekdays: Iterable[int]) -> int:
        ...

    async def upsert_exceptions(
        self, washer_id: UUID, rows: Sequence[ScheduleExceptionIn]
    ) -> None:
        """Insert or update on (washer_id, service_date)."""
        ...


class AvailabilityStore(Protocol):
    """Availability blocks and their capacity counters."""

    async def delete_blocks(self, washer_id: UUID, start_date: date, end_date: date) -> int:
        ...

    async def insert_blocks(self, blocks: Sequence[WasherAvailability]) -> int:
        ...

    async def list_blocks_for_day(self, zip_code: str, service_date: date) -> List[WasherAvailability]:
        """Blocks on a date in a ZIP, washer loaded, ordered by start_time."""
        ...

    async def list_blocks_in_range(
        self, zip_code: str, start_date: date, end_date: date
    ) -> List[WasherAvailability]:
        ...

    async def list_open_blocks_for_slot(
        self, zip_code: str, service_date: date, start_time: time, end_time: time
    ) -> List[WasherAvailability]:
        """Open-status blocks for an exact window; capacity not filtered."""
        ...

    async def list_open_blocks(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        zip_code: Optional[str] = None,
    ) -> List[WasherAvailability]:
        """Open-status blocks with washer loaded, by date then start_time."""
        ...

    async def get_block(self, availability_id: UUID) -> Optional[WasherAvailability]:
        ...

    async def reserve_capacity(self, availability_id: UUID) -> bool:
        """
        Increment current_bookings only while the block is open and below
        max_bookings. Returns False when nothing was updated.
        """
        ...


class WashStore(Protocol):
    """Washes and subscription credits."""

    async def get_credit(self, sharetribe_user_id: str) -> Optional[SubscriptionCredit]:
        ...

    async def count_completed_washes(
        self,
        zip_code: str,
        start: datetime,
        end: datetime,
        washer_ids: Iterable[UUID],
    ) -> Dict[UUID, int]:
        """Completed washes per washer with scheduled_start in [start, end)."""
        ...

    async def create_wash(self, wash: Wash) -> Wash:
        ...

    async def list_customer_washes(self, sharetribe_user_id: str) -> List[Wash]:
        """Customer washes with washer loaded, ordered by scheduled_start."""
        ...
