"""
Schedule Repository - washer_default_week and washer_schedule_exceptions
"""
from datetime import date
from typing import Iterable, List, Sequence
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from carwash.core.timezone import utc_now
from carwash.models.schedule import WasherDefaultWeek, WasherScheduleException
from carwash.schemas.schedule import ScheduleExceptionIn, WeeklyTemplateRowIn


class ScheduleRepository:
    """SQLAlchemy implementation of ScheduleStore"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_default_week(self, washer_id: UUID) -> List[WasherDefaultWeek]:
        result = await self.db.execute(
            select(WasherDefaultWeek)
            .where(WasherDefaultWeek.washer_id == washer_id)
            .order_by(WasherDefaultWeek.weekday)
        )
        return list(result.scalars().all())

    async def list_exceptions(
        self, washer_id: UUID, start_date: date, end_date: date
    ) -> List[WasherScheduleException]:
        result = await self.db.execute(
            select(WasherScheduleException)
            .where(
                WasherScheduleException.washer_id == washer_id,
                WasherScheduleException.service_date >= start_date,
                WasherScheduleException.service_date <= end_date,
            )
            .order_by(WasherScheduleException.service_date)
        )
        return list(result.scalars().all())

    async def upsert_default_week(
        self, washer_id: UUID, rows: Sequence[WeeklyTemplateRowIn]
    ) -> None:
        if not rows:
            return
        result = await self.db.execute(
            select(WasherDefaultWeek).where(
                WasherDefaultWeek.washer_id == washer_id,
                WasherDefaultWeek.weekday.in_([r.weekday for r in rows]),
            )
        )
        existing = {row.weekday: row for row in result.scalars().all()}

        for row in rows:
            stored = existing.get(row.weekday)
            if stored is None:
                stored = WasherDefaultWeek(washer_id=washer_id, weekday=row.weekday)
                self.db.add(stored)
            stored.is_working = row.is_working
            stored.start_time = row.start_time
            stored.end_time = row.end_time
            stored.zip = row.zip
            stored.updated_at = utc_now()
        await self.db.flush()

    async def delete_default_weekdays(self, washer_id: UUID, weekdays: Iterable[int]) -> int:
        weekdays = list(weekdays)
        if not weekdays:
            return 0
        result = await self.db.execute(
            delete(WasherDefaultWeek).where(
                WasherDefaultWeek.washer_id == washer_id,
                WasherDefaultWeek.weekday.in_(weekdays),
            )
        )
        return result.rowcount or 0

    async def upsert_exceptions(
        self, washer_id: UUID, rows: Sequence[ScheduleExceptionIn]
    ) -> None:
        if not rows:
            return
        result = await self.db.execute(
            select(WasherScheduleException).where(
                WasherScheduleException.washer_id == washer_id,
                WasherScheduleException.service_date.in_([r.service_date for r in rows]),
            )
        )
        existing = {row.service_date: row for row in result.scalars().all()}

        for row in rows:
            stored = existing.get(row.service_date)
            if stored is None:
                stored = WasherScheduleException(washer_id=washer_id, service_date=row.service_date)
                self.db.add(stored)
                existing[row.service_date] = stored
            stored.is_day_off = row.is_day_off
            stored.start_time = row.start_time
            stored.end_time = row.end_time
            stored.zip = row.zip
            stored.approval_status = row.approval_status
            stored.updated_at = utc_now()
        await self.db.flush()
