"""
Availability Service - month regeneration and read-side aggregation
"""
import logging
import uuid
from collections import Counter
from datetime import date
from typing import Dict, List, Optional, Sequence, Tuple
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from carwash.core.config import settings
from carwash.core.errors import StoreError
from carwash.models.availability import AvailabilityStatus, WasherAvailability
from carwash.repositories.base import AvailabilityStore
from carwash.schemas.availability import DaySummary, Slot, SlotWasher
from carwash.schemas.schedule import EffectiveDay

logger = logging.getLogger(__name__)


class AvailabilityService:
    """Writes availability blocks from resolved schedules and serves the booking views."""

    def __init__(self, availability: AvailabilityStore):
        self.availability = availability

    @staticmethod
    def build_blocks(washer_id: UUID, days: Sequence[EffectiveDay]) -> List[WasherAvailability]:
        """One fresh open block per working day that has a window and a ZIP."""
        return [
            WasherAvailability(
                id=uuid.uuid4(),
                washer_id=washer_id,
                service_date=day.service_date,
                start_time=day.start_time,
                end_time=day.end_time,
                location=str(day.zip),
                status=AvailabilityStatus.OPEN,
                max_bookings=settings.block_capacity,
                current_bookings=0,
            )
            for day in days
            if day.is_working and day.start_time and day.end_time and day.zip
        ]

    async def regenerate_month(
        self,
        washer_id: UUID,
        month_start: date,
        month_end: date,
        days: Sequence[EffectiveDay],
    ) -> int:
        """
        Replace the washer's blocks in [month_start, month_end] with blocks
        built from ``days``. Call only with a plan that passed the
        weekly-hours check. Returns the number of blocks created.
        """
        blocks = self.build_blocks(washer_id, days)

        try:
            removed = await self.availability.delete_blocks(washer_id, month_start, month_end)
        except SQLAlchemyError as e:
            raise StoreError("availability_delete_failed", e) from e

        try:
            created = await self.availability.insert_blocks(blocks)
        except SQLAlchemyError as e:
            raise StoreError("availability_insert_failed", e) from e

        logger.info(
            "Regenerated availability for washer %s (%s..%s): %d removed, %d created",
            washer_id, month_start, month_end, removed, created,
        )
        return created

    async def get_day_slots(self, zip_code: str, service_date: date) -> List[Slot]:
        """
        Group open-capacity blocks on a date by identical time window.
        Slots come back ordered by start time.
        """
        try:
            blocks = await self.availability.list_blocks_for_day(zip_code, service_date)
        except SQLAlchemyError as e:
            raise StoreError("availability_day_failed", e) from e

        slots: Dict[Tuple, Slot] = {}
        for block in blocks:
            if not block.has_open_capacity:
                continue

            key = (block.start_time, block.end_time)
            slot = slots.get(key)
            if slot is None:
                slot = Slot(start_time=block.start_time, end_time=block.end_time)
                slots[key] = slot

            washer = block.washer
            slot.availability_ids.append(block.id)
            slot.open_blocks += 1
            slot.total_capacity_remaining += block.remaining_capacity
            slot.washers.append(SlotWasher(
                id=block.washer_id,
                name=(washer.display_name if washer else "") or "",
                phone=(washer.phone if washer else "") or "",
                availability_id=block.id,
            ))

        return sorted(slots.values(), key=lambda s: s.start_time)

    async def get_range_summary(
        self, zip_code: str, start_date: date, end_date: date
    ) -> List[DaySummary]:
        """Per-date count of open-capacity blocks; dates without any are omitted."""
        try:
            blocks = await self.availability.list_blocks_in_range(zip_code, start_date, end_date)
        except SQLAlchemyError as e:
            raise StoreError("availability_range_failed", e) from e

        counts = Counter(block.service_date for block in blocks if block.has_open_capacity)
        return [DaySummary(date=day, open_blocks=counts[day]) for day in sorted(counts)]

    async def list_open_blocks(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        zip_code: Optional[str] = None,
    ) -> List[WasherAvailability]:
        """Admin listing of open-status blocks"""
        try:
            return await self.availability.list_open_blocks(start_date, end_date, zip_code)
        except SQLAlchemyError as e:
            raise StoreError("availability_list_failed", e) from e
