"""
Pydantic Schemas for Availability views
"""
from datetime import date, time
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from carwash.models.availability import AvailabilityStatus


class SlotWasher(BaseModel):
    """Technician entry in a slot roster"""
    id: UUID
    name: str = ""
    phone: str = ""
    availability_id: UUID


class Slot(BaseModel):
    """All open-capacity blocks sharing a time window on one date/ZIP"""
    start_time: time
    end_time: time
    open_blocks: int = 0
    total_capacity_remaining: int = 0
    availability_ids: List[UUID] = []
    washers: List[SlotWasher] = []


class DaySlotsResponse(BaseModel):
    zip: str
    date: date
    slots: List[Slot]


class DaySummary(BaseModel):
    """Number of open-capacity blocks on a date"""
    date: date
    open_blocks: int


class RangeSummaryResponse(BaseModel):
    zip: str
    start_date: date
    end_date: date
    days: List[DaySummary]


class WasherBrief(BaseModel):
    """Brief washer info"""
    id: UUID
    display_name: str
    phone: Optional[str] = None

    class Config:
        from_attributes = True


class AvailabilityBlockResponse(BaseModel):
    """Raw availability block (admin view)"""
    id: UUID
    washer_id: UUID
    service_date: date
    start_time: time
    end_time: time
    location: str
    status: AvailabilityStatus
    max_bookings: int
    current_bookings: int
    washer: Optional[WasherBrief] = None

    class Config:
        from_attributes = True


class AdminAvailabilityResponse(BaseModel):
    availability: List[AvailabilityBlockResponse]
