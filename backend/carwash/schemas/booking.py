"""
Pydantic Schemas for Bookings
"""
from datetime import date, time
from enum import Enum
from typing import Any, Optional
from uuid import UUID

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator
from pydantic_core import PydanticCustomError

from carwash.schemas.wash import WashResponse
from carwash.utils.parsing import normalize_time


class AssignmentMode(str, Enum):
    """How the technician is chosen"""
    AUTO = "auto"
    SPECIFIC = "specific"


class BookingCreate(BaseModel):
    """Customer booking request"""
    sharetribe_user_id: str = Field(..., min_length=1)
    zip: str = Field(..., min_length=1, validation_alias=AliasChoices("zip", "location"))
    service_date: date
    start_time: time
    end_time: time
    vehicle_count: int = Field(1, ge=1)
    mode: AssignmentMode = AssignmentMode.AUTO
    washer_id: Optional[UUID] = None

    @field_validator("sharetribe_user_id", "zip", mode="before")
    @classmethod
    def strip_text(cls, v: Any) -> Any:
        return str(v).strip() if v is not None else v

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def parse_time(cls, v: Any) -> time:
        parsed = normalize_time(v)
        if parsed is None:
            raise ValueError("time must be HH:MM or HH:MM:SS")
        return parsed

    @field_validator("vehicle_count", mode="before")
    @classmethod
    def default_vehicle_count(cls, v: Any) -> Any:
        return v or 1

    @field_validator("mode", mode="before")
    @classmethod
    def coerce_mode(cls, v: Any) -> AssignmentMode:
        # Anything that is not explicitly "specific" books automatically
        return AssignmentMode.SPECIFIC if v == AssignmentMode.SPECIFIC.value else AssignmentMode.AUTO

    @field_validator("washer_id", mode="before")
    @classmethod
    def blank_washer(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def require_washer_for_specific(self) -> "BookingCreate":
        if self.mode == AssignmentMode.SPECIFIC and self.washer_id is None:
            raise PydanticCustomError(
                "missing_washer_id",
                "washer_id is required when mode=specific",
            )
        return self


class AssignmentInfo(BaseModel):
    """Which block/technician a booking was assigned to"""
    washer_id: UUID
    availability_id: UUID
    mode: AssignmentMode


class BookingResponse(BaseModel):
    ok: bool = True
    wash: WashResponse
    assigned: AssignmentInfo
