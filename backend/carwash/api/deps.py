"""
API Dependencies
"""
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from carwash.db.database import get_db
from carwash.repositories.availability_repository import AvailabilityRepository
from carwash.repositories.schedule_repository import ScheduleRepository
from carwash.repositories.wash_repository import WashRepository
from carwash.services.availability_service import AvailabilityService
from carwash.services.booking_service import BookingService
from carwash.services.schedule_service import ScheduleService
from carwash.services.wash_service import WashService


def get_availability_service(db: AsyncSession = Depends(get_db)) -> AvailabilityService:
    return AvailabilityService(AvailabilityRepository(db))


def get_schedule_service(db: AsyncSession = Depends(get_db)) -> ScheduleService:
    """Schedule writes and availability regeneration share the request session"""
    return ScheduleService(
        ScheduleRepository(db),
        AvailabilityService(AvailabilityRepository(db)),
    )


def get_booking_service(db: AsyncSession = Depends(get_db)) -> BookingService:
    return BookingService(AvailabilityRepository(db), WashRepository(db))


def get_wash_service(db: AsyncSession = Depends(get_db)) -> WashService:
    return WashService(WashRepository(db))
