"""
Wash Service - customer dashboard and admin manual washes
"""
import logging
import uuid
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from carwash.core.errors import StoreError
from carwash.core.timezone import utc_now
from carwash.models.wash import Wash
from carwash.repositories.base import WashStore
from carwash.schemas.wash import (
    AdminWashCreate,
    AdminWashResponse,
    CreditsInfo,
    DashboardResponse,
    DashboardWash,
    WashResponse,
)

logger = logging.getLogger(__name__)


def to_dashboard_wash(wash: Wash) -> DashboardWash:
    washer = wash.washer
    return DashboardWash(
        id=wash.id,
        scheduled_start=wash.scheduled_start,
        scheduled_end=wash.scheduled_end,
        location=wash.location_id or "",
        washer_name=(washer.display_name if washer else "") or "",
        washer_phone=(washer.phone if washer else "") or "",
        status=wash.status,
        vehicle_count=wash.vehicle_count,
    )


class WashService:
    def __init__(self, washes: WashStore):
        self.washes = washes

    async def get_credits(self, sharetribe_user_id: str) -> Optional[CreditsInfo]:
        try:
            credit = await self.washes.get_credit(sharetribe_user_id)
        except SQLAlchemyError as e:
            logger.warning("Credit lookup failed for dashboard of %s: %s", sharetribe_user_id, e)
            return None

        if credit is None:
            return None
        return CreditsInfo(remaining=credit.credits_remaining, plan_label=credit.plan_label)

    async def get_dashboard(self, sharetribe_user_id: str) -> DashboardResponse:
        """
        Split the customer's washes around now: a wash is upcoming while its
        start (or end, if no start) has not passed. Both lists stay in
        ascending start order.
        """
        try:
            washes = await self.washes.list_customer_washes(sharetribe_user_id)
        except SQLAlchemyError as e:
            raise StoreError("dashboard_query_failed", e) from e

        now = utc_now()
        upcoming: List[DashboardWash] = []
        past: List[DashboardWash] = []
        for wash in washes:
            moment = wash.scheduled_start or wash.scheduled_end
            if moment is not None and moment >= now:
                upcoming.append(to_dashboard_wash(wash))
            else:
                past.append(to_dashboard_wash(wash))

        return DashboardResponse(
            upcoming=upcoming,
            past=past,
            credits=await self.get_credits(sharetribe_user_id),
        )

    async def create_admin_wash(self, wash_in: AdminWashCreate) -> AdminWashResponse:
        """Record a wash directly. No availability block is reserved and no credit check runs."""
        now = utc_now()
        wash = Wash(
            id=uuid.uuid4(),
            sharetribe_user_id=wash_in.sharetribe_user_id,
            subscription_id=wash_in.subscription_id,
            washer_id=wash_in.washer_id,
            status=wash_in.status,
            scheduled_start=wash_in.scheduled_start,
            scheduled_end=wash_in.scheduled_end,
            location_id=wash_in.location_id,
            vehicle_count=wash_in.vehicle_count,
            special_instructions=wash_in.special_instructions,
            late_cancellation_fee_applied=False,
            created_at=now,
            updated_at=now,
        )
        try:
            wash = await self.washes.create_wash(wash)
        except SQLAlchemyError as e:
            raise StoreError("create_wash_failed", e) from e

        logger.info("Admin created wash %s for %s (washer %s)", wash.id, wash.sharetribe_user_id, wash.washer_id)
        return AdminWashResponse(wash=WashResponse.model_validate(wash))
