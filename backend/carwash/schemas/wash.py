"""
Pydantic Schemas for Washes and the customer dashboard
"""
from datetime import datetime, timezone
from typing import Any, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from carwash.models.wash import WashStatus


class WashResponse(BaseModel):
    """Full wash response"""
    id: UUID
    sharetribe_user_id: str
    subscription_id: Optional[str] = None
    washer_id: Optional[UUID] = None
    status: WashStatus
    scheduled_start: datetime
    scheduled_end: Optional[datetime] = None
    location_id: str
    vehicle_count: int
    special_instructions: Optional[str] = None
    late_cancellation_fee_applied: bool = False
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class AdminWashCreate(BaseModel):
    """Manual wash entry; bypasses availability and capacity"""
    sharetribe_user_id: str = Field(..., min_length=1)
    subscription_id: Optional[str] = None
    washer_id: Optional[UUID] = None
    status: WashStatus = WashStatus.SCHEDULED
    scheduled_start: datetime
    scheduled_end: Optional[datetime] = None
    location_id: str = Field(..., min_length=1)
    vehicle_count: int = Field(1, ge=1)
    special_instructions: Optional[str] = None

    @field_validator("scheduled_start", "scheduled_end", mode="after")
    @classmethod
    def assume_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @field_validator("vehicle_count", "status", mode="before")
    @classmethod
    def empty_to_default(cls, v: Any, info) -> Any:
        if v:
            return v
        return 1 if info.field_name == "vehicle_count" else WashStatus.SCHEDULED


class AdminWashResponse(BaseModel):
    wash: WashResponse


class DashboardWash(BaseModel):
    """Wash as shown on the customer dashboard"""
    id: UUID
    scheduled_start: Optional[datetime] = None
    scheduled_end: Optional[datetime] = None
    location: str = ""
    washer_name: str = ""
    washer_phone: str = ""
    status: WashStatus
    vehicle_count: int


class CreditsInfo(BaseModel):
    remaining: int
    plan_label: Optional[str] = None


class DashboardResponse(BaseModel):
    """Customer washes split around the current time"""
    upcoming: List[DashboardWash]
    past: List[DashboardWash]
    credits: Optional[CreditsInfo] = None
