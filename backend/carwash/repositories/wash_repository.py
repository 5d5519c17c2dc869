"""
Wash Repository - washes and subscription credits
"""
from datetime import datetime
from typing import Dict, Iterable, List, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from carwash.models.subscription_credit import SubscriptionCredit
from carwash.models.wash import Wash, WashStatus


class WashRepository:
    """SQLAlchemy implementation of WashStore"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_credit(self, sharetribe_user_id: str) -> Optional[SubscriptionCredit]:
        # Savepoint: a failed lookup must not poison the booking transaction
        async with self.db.begin_nested():
            result = await self.db.execute(
                select(SubscriptionCredit)
                .where(SubscriptionCredit.sharetribe_user_id == sharetribe_user_id)
                .limit(1)
            )
            return result.scalar_one_or_none()

    async def count_completed_washes(
        self,
        zip_code: str,
        start: datetime,
        end: datetime,
        washer_ids: Iterable[UUID],
    ) -> Dict[UUID, int]:
        washer_ids = list(washer_ids)
        if not washer_ids:
            return {}
        async with self.db.begin_nested():
            result = await self.db.execute(
                select(Wash.washer_id, func.count(Wash.id))
                .where(
                    Wash.location_id == zip_code,
                    Wash.status == WashStatus.COMPLETED,
                    Wash.scheduled_start >= start,
                    Wash.scheduled_start < end,
                    Wash.washer_id.in_(washer_ids),
                )
                .group_by(Wash.washer_id)
            )
            return {washer_id: count for washer_id, count in result.all()}

    async def create_wash(self, wash: Wash) -> Wash:
        self.db.add(wash)
        await self.db.flush()
        await self.db.refresh(wash)
        return wash

    async def list_customer_washes(self, sharetribe_user_id: str) -> List[Wash]:
        result = await self.db.execute(
            select(Wash)
            .options(selectinload(Wash.washer))
            .where(Wash.sharetribe_user_id == sharetribe_user_id)
            .order_by(Wash.scheduled_start.asc())
        )
        return list(result.scalars().all())
