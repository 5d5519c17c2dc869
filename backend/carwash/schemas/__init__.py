"""
Schemas module initialization
"""
from carwash.schemas.schedule import (
    WeeklyTemplateRowIn,
    ScheduleExceptionIn,
    ScheduleSaveRequest,
    EffectiveDay,
    WeekFailure,
    WeeklyHoursResult,
    DefaultWeekRowResponse,
    ScheduleExceptionResponse,
    StaffScheduleResponse,
    ScheduleSaveResponse,
    SchedulePreviewResponse,
)
from carwash.schemas.availability import (
    SlotWasher,
    Slot,
    DaySlotsResponse,
    DaySummary,
    RangeSummaryResponse,
    WasherBrief,
    AvailabilityBlockResponse,
    AdminAvailabilityResponse,
)
from carwash.schemas.wash import (
    WashResponse,
    AdminWashCreate,
    AdminWashResponse,
    DashboardWash,
    CreditsInfo,
    DashboardResponse,
)
from carwash.schemas.booking import (
    AssignmentMode,
    BookingCreate,
    AssignmentInfo,
    BookingResponse,
)

__all__ = [
    # Schedule
    "WeeklyTemplateRowIn",
    "ScheduleExceptionIn",
    "ScheduleSaveRequest",
    "EffectiveDay",
    "WeekFailure",
    "WeeklyHoursResult",
    "DefaultWeekRowResponse",
    "ScheduleExceptionResponse",
    "StaffScheduleResponse",
    "ScheduleSaveResponse",
    "SchedulePreviewResponse",
    # Availability
    "SlotWasher",
    "Slot",
    "DaySlotsResponse",
    "DaySummary",
    "RangeSummaryResponse",
    "WasherBrief",
    "AvailabilityBlockResponse",
    "AdminAvailabilityResponse",
    # Wash
    "WashResponse",
    "AdminWashCreate",
    "AdminWashResponse",
    "DashboardWash",
    "CreditsInfo",
    "DashboardResponse",
    # Booking
    "AssignmentMode",
    "BookingCreate",
    "AssignmentInfo",
    "BookingResponse",
]
