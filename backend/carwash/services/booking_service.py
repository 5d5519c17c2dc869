"""
Booking Service - assigns a customer wash to a technician's availability block.

Flow: credit gate, candidate lookup, washer selection (specific or
fairness-ordered auto), atomic capacity reservation, wash creation.
Credits are checked but not decremented here.
"""
import logging
import uuid
from typing import Dict, List
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from carwash.core.errors import (
    AvailabilityNotFoundError,
    CapacityFullError,
    NoCapacityError,
    NoCreditsError,
    StoreError,
    WasherNotAvailableError,
)
from carwash.core.timezone import service_datetime_to_utc, utc_month_bounds, utc_now
from carwash.models.availability import WasherAvailability
from carwash.models.wash import Wash, WashStatus
from carwash.repositories.base import AvailabilityStore, WashStore
from carwash.schemas.booking import AssignmentInfo, AssignmentMode, BookingCreate, BookingResponse
from carwash.schemas.wash import WashResponse

logger = logging.getLogger(__name__)


class BookingService:
    """Customer booking against open availability blocks"""

    def __init__(self, availability: AvailabilityStore, washes: WashStore):
        self.availability = availability
        self.washes = washes

    async def check_credits(self, sharetribe_user_id: str) -> None:
        """
        Reject customers whose credit record shows nothing left. A missing
        record, or a lookup that fails, lets the booking through.
        """
        try:
            credit = await self.washes.get_credit(sharetribe_user_id)
        except SQLAlchemyError as e:
            logger.warning("Credit lookup failed for %s, continuing: %s", sharetribe_user_id, e)
            return

        if credit is not None and (credit.credits_remaining or 0) <= 0:
            raise NoCreditsError()

    async def find_candidates(self, request: BookingCreate) -> List[WasherAvailability]:
        """Open blocks matching the requested ZIP, date and exact window that still have room"""
        try:
            blocks = await self.availability.list_open_blocks_for_slot(
                request.zip, request.service_date, request.start_time, request.end_time
            )
        except SQLAlchemyError as e:
            raise StoreError("availability_lookup_failed", e) from e

        candidates = [block for block in blocks if block.has_open_capacity]
        if not candidates:
            raise NoCapacityError()
        return candidates

    async def completed_counts(
        self, request: BookingCreate, candidates: List[WasherAvailability]
    ) -> Dict[UUID, int]:
        """Completed washes this UTC month, per candidate washer, in the requested ZIP"""
        month_start, month_end = utc_month_bounds(request.service_date)
        washer_ids = {block.washer_id for block in candidates}
        try:
            return await self.washes.count_completed_washes(
                request.zip, month_start, month_end, washer_ids
            )
        except SQLAlchemyError as e:
            logger.warning("Completed-wash counts unavailable, treating all washers as 0: %s", e)
            return {}

    async def choose_block(
        self, request: BookingCreate, candidates: List[WasherAvailability]
    ) -> WasherAvailability:
        if request.mode == AssignmentMode.SPECIFIC:
            for block in candidates:
                if block.washer_id == request.washer_id:
                    return block
            raise WasherNotAvailableError()

        counts = await self.completed_counts(request, candidates)
        # Fewest completed washes first; ties go to the lexicographically smaller id
        return min(
            candidates,
            key=lambda block: (counts.get(block.washer_id, 0), str(block.washer_id)),
        )

    async def reserve_block(self, block: WasherAvailability) -> None:
        """
        Take one booking from ``block``. The snapshot is checked first, then
        the store performs the conditional increment. When the increment does
        not apply, the block is re-read to tell a vanished block from a full one.
        """
        if not block.has_open_capacity:
            raise CapacityFullError()

        try:
            reserved = await self.availability.reserve_capacity(block.id)
        except SQLAlchemyError as e:
            raise StoreError("reserve_failed", e) from e

        if reserved:
            return

        try:
            current = await self.availability.get_block(block.id)
        except SQLAlchemyError as e:
            raise StoreError("reserve_failed", e) from e

        if current is None:
            raise AvailabilityNotFoundError()
        raise CapacityFullError()

    async def book(self, request: BookingCreate) -> BookingResponse:
        await self.check_credits(request.sharetribe_user_id)

        candidates = await self.find_candidates(request)
        block = await self.choose_block(request, candidates)
        await self.reserve_block(block)

        now = utc_now()
        wash = Wash(
            id=uuid.uuid4(),
            sharetribe_user_id=request.sharetribe_user_id,
            washer_id=block.washer_id,
            status=WashStatus.SCHEDULED,
            scheduled_start=service_datetime_to_utc(request.service_date, request.start_time),
            scheduled_end=service_datetime_to_utc(request.service_date, request.end_time),
            location_id=request.zip,
            vehicle_count=request.vehicle_count,
            late_cancellation_fee_applied=False,
            created_at=now,
            updated_at=now,
        )
        try:
            wash = await self.washes.create_wash(wash)
        except SQLAlchemyError as e:
            raise StoreError("create_wash_failed", e) from e

        logger.info(
            "Booked wash %s for %s with washer %s (block %s, mode=%s)",
            wash.id, request.sharetribe_user_id, block.washer_id, block.id, request.mode.value,
        )
        return BookingResponse(
            wash=WashResponse.model_validate(wash),
            assigned=AssignmentInfo(
                washer_id=block.washer_id,
                availability_id=block.id,
                mode=request.mode,
            ),
        )
