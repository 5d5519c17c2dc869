"""
Availability Endpoints - customer-facing day and range views
"""
from datetime import date
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query

from carwash.api import deps
from carwash.core.errors import InvalidRequestError
from carwash.schemas.availability import DaySlotsResponse, RangeSummaryResponse
from carwash.services.availability_service import AvailabilityService
from carwash.utils.parsing import clean_zip

router = APIRouter()


@router.get("")
async def get_availability(
    zip: Optional[str] = Query(None),
    service_date: Optional[date] = Query(None, alias="date"),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    service: AvailabilityService = Depends(deps.get_availability_service),
) -> Any:
    """
    With ``date``: open slots grouped by time window.
    With ``start_date`` and ``end_date``: open block count per day.
    """
    zip_code = clean_zip(zip)
    if not zip_code:
        raise InvalidRequestError("zip is required", code="missing_zip")

    if start_date and end_date:
        days = await service.get_range_summary(zip_code, start_date, end_date)
        return RangeSummaryResponse(zip=zip_code, start_date=start_date, end_date=end_date, days=days)

    if service_date is None:
        raise InvalidRequestError("date or start_date/end_date is required", code="missing_date")

    slots = await service.get_day_slots(zip_code, service_date)
    return DaySlotsResponse(zip=zip_code, date=service_date, slots=slots)
