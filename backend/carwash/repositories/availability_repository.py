"""
Availability Repository - washer_availability blocks
"""
from datetime import date, time
from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from carwash.models.availability import AvailabilityStatus, WasherAvailability


class AvailabilityRepository:
    """SQLAlchemy implementation of AvailabilityStore"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def delete_blocks(self, washer_id: UUID, start_date: date, end_date: date) -> int:
        result = await self.db.execute(
            delete(WasherAvailability).where(
                WasherAvailability.washer_id == washer_id,
                WasherAvailability.service_date >= start_date,
                WasherAvailability.service_date <= end_date,
            )
        )
        return result.rowcount or 0

    async def insert_blocks(self, blocks: Sequence[WasherAvailability]) -> int:
        if not blocks:
            return 0
        self.db.add_all(blocks)
        await self.db.flush()
        return len(blocks)

    async def list_blocks_for_day(self, zip_code: str, service_date: date) -> List[WasherAvailability]:
        result = await self.db.execute(
            select(WasherAvailability)
            .options(selectinload(WasherAvailability.washer))
            .where(
                WasherAvailability.location == zip_code,
                WasherAvailability.service_date == service_date,
            )
            .order_by(WasherAvailability.start_time.asc())
        )
        return list(result.scalars().all())

    async def list_blocks_in_range(
        self, zip_code: str, start_date: date, end_date: date
    ) -> List[WasherAvailability]:
        result = await self.db.execute(
            select(WasherAvailability).where(
                WasherAvailability.location == zip_code,
                WasherAvailability.service_date >= start_date,
                WasherAvailability.service_date <= end_date,
            )
        )
        return list(result.scalars().all())

    async def list_open_blocks_for_slot(
        self, zip_code: str, service_date: date, start_time: time, end_time: time
    ) -> List[WasherAvailability]:
        result = await self.db.execute(
            select(WasherAvailability).where(
                WasherAvailability.location == zip_code,
                WasherAvailability.service_date == service_date,
                WasherAvailability.start_time == start_time,
                WasherAvailability.end_time == end_time,
                WasherAvailability.status == AvailabilityStatus.OPEN,
            )
        )
        return list(result.scalars().all())

    async def list_open_blocks(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        zip_code: Optional[str] = None,
    ) -> List[WasherAvailability]:
        query = (
            select(WasherAvailability)
            .options(selectinload(WasherAvailability.washer))
            .where(WasherAvailability.status == AvailabilityStatus.OPEN)
        )
        if start_date:
            query = query.where(WasherAvailability.service_date >= start_date)
        if end_date:
            query = query.where(WasherAvailability.service_date <= end_date)
        if zip_code:
            query = query.where(WasherAvailability.location == zip_code)
        query = query.order_by(
            WasherAvailability.service_date.asc(),
            WasherAvailability.start_time.asc(),
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_block(self, availability_id: UUID) -> Optional[WasherAvailability]:
        result = await self.db.execute(
            select(WasherAvailability)
            .where(WasherAvailability.id == availability_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def reserve_capacity(self, availability_id: UUID) -> bool:
        # Single conditional UPDATE: the capacity check and the increment
        # happen atomically in the database
        result = await self.db.execute(
            update(WasherAvailability)
            .where(
                WasherAvailability.id == availability_id,
                WasherAvailability.status == AvailabilityStatus.OPEN,
                WasherAvailability.current_bookings < WasherAvailability.max_bookings,
            )
            .values(current_bookings=WasherAvailability.current_bookings + 1)
            .execution_options(synchronize_session=False)
        )
        return (result.rowcount or 0) == 1
