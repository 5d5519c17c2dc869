"""
Pydantic Schemas for Washer Schedules
"""
from datetime import date, datetime, time
from typing import Any, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from carwash.models.schedule import ApprovalStatus
from carwash.utils.parsing import normalize_time


# ============== Request Schemas ==============

class WeeklyTemplateRowIn(BaseModel):
    """One weekday of the submitted weekly template (0 = Sunday)"""
    weekday: int
    is_working: bool = False
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    zip: Optional[str] = None

    @field_validator("is_working", mode="before")
    @classmethod
    def coerce_working(cls, v: Any) -> bool:
        return bool(v)

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def parse_time(cls, v: Any) -> Optional[time]:
        # Malformed times are dropped; the service fills the default window
        return normalize_time(v)

    @field_validator("zip", mode="before")
    @classmethod
    def strip_zip(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        return str(v).strip() or None


class ScheduleExceptionIn(BaseModel):
    """A date override. Entries without service_date are ignored."""
    service_date: Optional[date] = None
    is_day_off: bool = False
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    zip: Optional[str] = None
    approval_status: ApprovalStatus = ApprovalStatus.APPROVED

    @field_validator("is_day_off", mode="before")
    @classmethod
    def coerce_day_off(cls, v: Any) -> bool:
        return bool(v)

    @field_validator("service_date", mode="before")
    @classmethod
    def blank_date(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def parse_time(cls, v: Any) -> Optional[time]:
        return normalize_time(v)

    @field_validator("zip", mode="before")
    @classmethod
    def strip_zip(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        return str(v).strip() or None

    @field_validator("approval_status", mode="before")
    @classmethod
    def default_status(cls, v: Any) -> Any:
        return v or ApprovalStatus.APPROVED


class ScheduleSaveRequest(BaseModel):
    """Staff schedule submission for one month"""
    washer_id: UUID
    month: str = Field(..., description="YYYY-MM")
    default_zip: Optional[str] = None
    default_week: List[WeeklyTemplateRowIn] = Field(default_factory=list)
    exceptions: List[ScheduleExceptionIn] = Field(default_factory=list)

    @field_validator("default_week", "exceptions", mode="before")
    @classmethod
    def none_to_list(cls, v: Any) -> Any:
        return v if isinstance(v, list) else []


# ============== Derived ==============

class EffectiveDay(BaseModel):
    """Resolved working state of one washer on one date"""
    service_date: date
    weekday: int
    is_working: bool
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    zip: Optional[str] = None
    hours: float = 0.0


class WeekFailure(BaseModel):
    """A Sunday-anchored week whose total is under the minimum"""
    week_start: date
    hours: float


class WeeklyHoursResult(BaseModel):
    ok: bool
    failures: List[WeekFailure] = []


# ============== Response Schemas ==============

class DefaultWeekRowResponse(BaseModel):
    """Stored weekly template row"""
    id: UUID
    washer_id: UUID
    weekday: int
    is_working: bool
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    zip: str
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ScheduleExceptionResponse(BaseModel):
    """Stored schedule exception"""
    id: UUID
    washer_id: UUID
    service_date: date
    is_day_off: bool
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    zip: Optional[str] = None
    approval_status: ApprovalStatus
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class StaffScheduleResponse(BaseModel):
    """Raw schedule rows for the editing screen"""
    washer_id: UUID
    month: str
    default_week: List[DefaultWeekRowResponse]
    exceptions: List[ScheduleExceptionResponse]


class ScheduleSaveResponse(BaseModel):
    ok: bool = True
    washer_id: UUID
    month: str
    blocks_created: int


class SchedulePreviewResponse(BaseModel):
    """Resolved month plan and its weekly-hours check; nothing persisted"""
    washer_id: UUID
    month: str
    days: List[EffectiveDay]
    validation: WeeklyHoursResult
