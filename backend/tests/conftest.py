"""Shared test fixtures and helpers."""

import uuid
from datetime import date, datetime, time
from typing import Dict, Iterable, List, Optional, Sequence, Set
from uuid import UUID

import pytest
from sqlalchemy.exc import SQLAlchemyError

from carwash.core.timezone import utc_now
from carwash.models.availability import AvailabilityStatus, WasherAvailability
from carwash.models.schedule import WasherDefaultWeek, WasherScheduleException
from carwash.models.subscription_credit import SubscriptionCredit
from carwash.models.wash import Wash, WashStatus
from carwash.models.washer import Washer
from carwash.services.availability_service import AvailabilityService
from carwash.services.booking_service import BookingService
from carwash.services.schedule_service import ScheduleService
from carwash.services.wash_service import WashService

ZIP = "10001"


class InMemoryStore:
    """
    Dict-backed ScheduleStore, AvailabilityStore and WashStore. Names added
    to ``failing`` make the matching method raise SQLAlchemyError.
    """

    def __init__(self):
        self.washers: Dict[UUID, Washer] = {}
        self.default_week: Dict[tuple, WasherDefaultWeek] = {}
        self.exceptions: Dict[tuple, WasherScheduleException] = {}
        self.blocks: Dict[UUID, WasherAvailability] = {}
        self.washes: List[Wash] = []
        self.credits: Dict[str, SubscriptionCredit] = {}
        self.failing: Set[str] = set()

    def _check(self, name: str) -> None:
        if name in self.failing:
            raise SQLAlchemyError(f"{name} boom")

    # ScheduleStore

    async def list_default_week(self, washer_id):
        self._check("list_default_week")
        rows = [row for (wid, _), row in self.default_week.items() if wid == washer_id]
        return sorted(rows, key=lambda r: r.weekday)

    async def list_exceptions(self, washer_id, start_date, end_date):
        self._check("list_exceptions")
        rows = [
            row for (wid, day), row in self.exceptions.items()
            if wid == washer_id and start_date <= day <= end_date
        ]
        return sorted(rows, key=lambda r: r.service_date)

    async def upsert_default_week(self, washer_id, rows):
        self._check("upsert_default_week")
        for row in rows:
            stored = self.default_week.get((washer_id, row.weekday))
            if stored is None:
                stored = WasherDefaultWeek(id=uuid.uuid4(), washer_id=washer_id, weekday=row.weekday)
                self.default_week[(washer_id, row.weekday)] = stored
            stored.is_working = row.is_working
            stored.start_time = row.start_time
            stored.end_time = row.end_time
            stored.zip = row.zip
            stored.updated_at = utc_now()

    async def delete_default_weekdays(self, washer_id, weekdays: Iterable[int]) -> int:
        self._check("delete_default_weekdays")
        removed = 0
        for weekday in list(weekdays):
            if self.default_week.pop((washer_id, weekday), None) is not None:
                removed += 1
        return removed

    async def upsert_exceptions(self, washer_id, rows):
        self._check("upsert_exceptions")
        for row in rows:
            stored = self.exceptions.get((washer_id, row.service_date))
            if stored is None:
                stored = WasherScheduleException(
                    id=uuid.uuid4(), washer_id=washer_id, service_date=row.service_date
                )
                self.exceptions[(washer_id, row.service_date)] = stored
            stored.is_day_off = row.is_day_off
            stored.start_time = row.start_time
            stored.end_time = row.end_time
            stored.zip = row.zip
            stored.approval_status = row.approval_status
            stored.updated_at = utc_now()

    # AvailabilityStore

    async def delete_blocks(self, washer_id, start_date, end_date) -> int:
        self._check("delete_blocks")
        doomed = [
            block.id for block in self.blocks.values()
            if block.washer_id == washer_id and start_date <= block.service_date <= end_date
        ]
        for block_id in doomed:
            del self.blocks[block_id]
        return len(doomed)

    async def insert_blocks(self, blocks: Sequence[WasherAvailability]) -> int:
        self._check("insert_blocks")
        for block in blocks:
            block.washer = self.washers.get(block.washer_id)
            self.blocks[block.id] = block
        return len(blocks)

    async def list_blocks_for_day(self, zip_code, service_date):
        self._check("list_blocks_for_day")
        blocks = [
            b for b in self.blocks.values()
            if b.location == zip_code and b.service_date == service_date
        ]
        return sorted(blocks, key=lambda b: b.start_time)

    async def list_blocks_in_range(self, zip_code, start_date, end_date):
        self._check("list_blocks_in_range")
        return [
            b for b in self.blocks.values()
            if b.location == zip_code and start_date <= b.service_date <= end_date
        ]

    async def list_open_blocks_for_slot(self, zip_code, service_date, start_time, end_time):
        self._check("list_open_blocks_for_slot")
        return [
            b for b in self.blocks.values()
            if b.location == zip_code
            and b.service_date == service_date
            and b.start_time == start_time
            and b.end_time == end_time
            and b.status == AvailabilityStatus.OPEN
        ]

    async def list_open_blocks(self, start_date=None, end_date=None, zip_code=None):
        self._check("list_open_blocks")
        blocks = [
            b for b in self.blocks.values()
            if b.status == AvailabilityStatus.OPEN
            and (not start_date or b.service_date >= start_date)
            and (not end_date or b.service_date <= end_date)
            and (not zip_code or b.location == zip_code)
        ]
        return sorted(blocks, key=lambda b: (b.service_date, b.start_time))

    async def get_block(self, availability_id):
        self._check("get_block")
        return self.blocks.get(availability_id)

    async def reserve_capacity(self, availability_id) -> bool:
        self._check("reserve_capacity")
        block = self.blocks.get(availability_id)
        if block is None or block.status != AvailabilityStatus.OPEN:
            return False
        if block.current_bookings >= block.max_bookings:
            return False
        block.current_bookings += 1
        return True

    # WashStore

    async def get_credit(self, sharetribe_user_id):
        self._check("get_credit")
        return self.credits.get(sharetribe_user_id)

    async def count_completed_washes(self, zip_code, start, end, washer_ids):
        self._check("count_completed_washes")
        ids = set(washer_ids)
        counts: Dict[UUID, int] = {}
        for wash in self.washes:
            if (
                wash.location_id == zip_code
                and wash.status == WashStatus.COMPLETED
                and start <= wash.scheduled_start < end
                and wash.washer_id in ids
            ):
                counts[wash.washer_id] = counts.get(wash.washer_id, 0) + 1
        return counts

    async def create_wash(self, wash: Wash) -> Wash:
        self._check("create_wash")
        wash.washer = self.washers.get(wash.washer_id)
        self.washes.append(wash)
        return wash

    async def list_customer_washes(self, sharetribe_user_id):
        self._check("list_customer_washes")
        washes = [w for w in self.washes if w.sharetribe_user_id == sharetribe_user_id]
        return sorted(washes, key=lambda w: w.scheduled_start)


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def availability_service(store):
    return AvailabilityService(store)


@pytest.fixture
def schedule_service(store, availability_service):
    return ScheduleService(store, availability_service)


@pytest.fixture
def booking_service(store):
    return BookingService(store, store)


@pytest.fixture
def wash_service(store):
    return WashService(store)


def make_washer(
    store: InMemoryStore,
    name: str = "Alex",
    phone: Optional[str] = "555-0100",
    washer_id: Optional[UUID] = None,
) -> Washer:
    """Helper to register a Washer in the store."""
    washer = Washer(
        id=washer_id or uuid.uuid4(),
        display_name=name,
        phone=phone,
        created_at=utc_now(),
    )
    store.washers[washer.id] = washer
    return washer


def make_block(
    store: InMemoryStore,
    washer: Washer,
    service_date: date = date(2025, 12, 1),
    start_time: time = time(10, 0),
    end_time: time = time(15, 0),
    zip_code: str = ZIP,
    current_bookings: int = 0,
    max_bookings: int = 3,
    status: AvailabilityStatus = AvailabilityStatus.OPEN,
) -> WasherAvailability:
    """Helper to store a WasherAvailability block with sensible defaults."""
    block = WasherAvailability(
        id=uuid.uuid4(),
        washer_id=washer.id,
        service_date=service_date,
        start_time=start_time,
        end_time=end_time,
        location=zip_code,
        status=status,
        max_bookings=max_bookings,
        current_bookings=current_bookings,
        created_at=utc_now(),
    )
    block.washer = washer
    store.blocks[block.id] = block
    return block


def make_wash(
    store: InMemoryStore,
    washer: Optional[Washer],
    scheduled_start: datetime,
    sharetribe_user_id: str = "user-1",
    status: WashStatus = WashStatus.COMPLETED,
    zip_code: str = ZIP,
) -> Wash:
    """Helper to store a Wash with sensible defaults."""
    wash = Wash(
        id=uuid.uuid4(),
        sharetribe_user_id=sharetribe_user_id,
        washer_id=washer.id if washer else None,
        status=status,
        scheduled_start=scheduled_start,
        scheduled_end=None,
        location_id=zip_code,
        vehicle_count=1,
        late_cancellation_fee_applied=False,
        created_at=utc_now(),
        updated_at=utc_now(),
    )
    wash.washer = washer
    store.washes.append(wash)
    return wash


def make_credit(
    store: InMemoryStore,
    sharetribe_user_id: str = "user-1",
    credits_remaining: int = 4,
    plan_label: Optional[str] = "Monthly 4",
) -> SubscriptionCredit:
    credit = SubscriptionCredit(
        id=uuid.uuid4(),
        sharetribe_user_id=sharetribe_user_id,
        credits_remaining=credits_remaining,
        plan_label=plan_label,
        updated_at=utc_now(),
    )
    store.credits[sharetribe_user_id] = credit
    return credit
