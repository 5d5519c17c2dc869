"""
Staff Schedule Endpoints
"""
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from carwash.api import deps
from carwash.schemas.schedule import (
    SchedulePreviewResponse,
    ScheduleSaveRequest,
    ScheduleSaveResponse,
    StaffScheduleResponse,
)
from carwash.services.schedule_service import ScheduleService

router = APIRouter()


@router.get("", response_model=StaffScheduleResponse)
async def get_staff_schedule(
    washer_id: UUID = Query(...),
    month: str = Query(...),
    service: ScheduleService = Depends(deps.get_schedule_service),
) -> Any:
    """
    Stored weekly template and the exceptions for the month (YYYY-MM).
    """
    return await service.get_schedule(washer_id, month)


@router.post("", response_model=ScheduleSaveResponse)
async def save_staff_schedule(
    schedule_in: ScheduleSaveRequest,
    service: ScheduleService = Depends(deps.get_schedule_service),
) -> Any:
    """
    Save the weekly template and exceptions, then rebuild the month's
    availability. Rejected with min_weekly_hours_failed if any week is short.
    """
    return await service.save_schedule(schedule_in)


@router.post("/preview", response_model=SchedulePreviewResponse)
async def preview_staff_schedule(
    schedule_in: ScheduleSaveRequest,
    service: ScheduleService = Depends(deps.get_schedule_service),
) -> Any:
    """Resolve and validate a submission without saving anything."""
    return service.preview(schedule_in)
