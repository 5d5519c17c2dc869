"""
Schedule Service - staff schedule read, preview and save.

Save pipeline: normalize the submission, resolve the month, check weekly
minimum hours, then persist template rows, exceptions and regenerated
availability. Nothing is written unless every week passes.
"""
import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence, Tuple
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from carwash.core.config import settings
from carwash.core.errors import InvalidMonthError, MinWeeklyHoursError, StoreError
from carwash.repositories.base import ScheduleStore
from carwash.schemas.schedule import (
    DefaultWeekRowResponse,
    EffectiveDay,
    ScheduleExceptionIn,
    ScheduleExceptionResponse,
    SchedulePreviewResponse,
    ScheduleSaveRequest,
    ScheduleSaveResponse,
    StaffScheduleResponse,
    WeeklyHoursResult,
    WeeklyTemplateRowIn,
)
from carwash.services.availability_service import AvailabilityService
from carwash.services.schedule_resolver import resolve_month, validate_weekly_hours
from carwash.utils.parsing import clean_zip, parse_month

logger = logging.getLogger(__name__)


@dataclass
class MonthPlan:
    """A normalized submission and its resolved month"""
    month_start: date
    month_end: date
    week: List[WeeklyTemplateRowIn]
    exceptions: List[ScheduleExceptionIn]
    days: List[EffectiveDay]
    validation: WeeklyHoursResult


def month_bounds(month: str) -> Tuple[date, date]:
    bounds = parse_month(month)
    if bounds is None:
        raise InvalidMonthError()
    return bounds


def fallback_zip(default_zip: Optional[str]) -> str:
    return clean_zip(default_zip) or settings.default_zip


def normalize_default_week(
    rows: Sequence[WeeklyTemplateRowIn], default_zip: str
) -> List[WeeklyTemplateRowIn]:
    """
    Expand the submitted template to exactly seven rows (Sunday..Saturday).
    Missing weekdays are days off and rows outside 0..6 are ignored; a working
    day without a usable window gets the default window.
    """
    by_weekday = {}
    for row in rows:
        by_weekday.setdefault(row.weekday, row)

    week = []
    for weekday in range(7):
        row = by_weekday.get(weekday)
        is_working = bool(row is not None and row.is_working)
        week.append(WeeklyTemplateRowIn(
            weekday=weekday,
            is_working=is_working,
            start_time=(row.start_time or settings.default_start_time) if is_working else None,
            end_time=(row.end_time or settings.default_end_time) if is_working else None,
            zip=(row.zip if row is not None else None) or default_zip,
        ))
    return week


def normalize_exceptions(rows: Sequence[ScheduleExceptionIn]) -> List[ScheduleExceptionIn]:
    """Drop undated entries, clear day-off windows, keep the last entry per date."""
    by_date = {}
    for row in rows:
        if row.service_date is None:
            continue
        if row.is_day_off:
            row = row.model_copy(update={"start_time": None, "end_time": None})
        by_date[row.service_date] = row
    return [by_date[d] for d in sorted(by_date)]


class ScheduleService:
    """Staff-facing schedule operations for one washer and month"""

    def __init__(self, schedules: ScheduleStore, availability_service: AvailabilityService):
        self.schedules = schedules
        self.availability_service = availability_service

    async def get_schedule(self, washer_id: UUID, month: str) -> StaffScheduleResponse:
        """Stored template rows plus the exceptions falling inside the month"""
        month_start, month_end = month_bounds(month)

        try:
            default_week = await self.schedules.list_default_week(washer_id)
        except SQLAlchemyError as e:
            raise StoreError("default_week_query_failed", e) from e

        try:
            exceptions = await self.schedules.list_exceptions(washer_id, month_start, month_end)
        except SQLAlchemyError as e:
            raise StoreError("exceptions_query_failed", e) from e

        return StaffScheduleResponse(
            washer_id=washer_id,
            month=month,
            default_week=[DefaultWeekRowResponse.model_validate(row) for row in default_week],
            exceptions=[ScheduleExceptionResponse.model_validate(row) for row in exceptions],
        )

    def plan_month(self, request: ScheduleSaveRequest) -> MonthPlan:
        """Normalize a submission and resolve/validate its month. No store access."""
        month_start, month_end = month_bounds(request.month)
        zip_code = fallback_zip(request.default_zip)

        week = normalize_default_week(request.default_week, zip_code)
        exceptions = normalize_exceptions(request.exceptions)

        days = resolve_month(week, exceptions, month_start, month_end, zip_code)
        return MonthPlan(
            month_start=month_start,
            month_end=month_end,
            week=week,
            exceptions=exceptions,
            days=days,
            validation=validate_weekly_hours(days),
        )

    def preview(self, request: ScheduleSaveRequest) -> SchedulePreviewResponse:
        plan = self.plan_month(request)
        return SchedulePreviewResponse(
            washer_id=request.washer_id,
            month=request.month,
            days=plan.days,
            validation=plan.validation,
        )

    async def save_schedule(self, request: ScheduleSaveRequest) -> ScheduleSaveResponse:
        plan = self.plan_month(request)
        validation = plan.validation

        if not validation.ok:
            logger.info(
                "Schedule for washer %s (%s) rejected: %d week(s) under %s hours",
                request.washer_id, request.month, len(validation.failures), settings.min_weekly_hours,
            )
            raise MinWeeklyHoursError(
                [f.model_dump(mode="json") for f in validation.failures],
                message=f"Schedule must include at least {settings.min_weekly_hours:g} hours per week.",
            )

        washer_id = request.washer_id
        working_days = [row for row in plan.week if row.is_working]
        off_weekdays = [row.weekday for row in plan.week if not row.is_working]

        # Absence of a weekday row is what marks it as a day off
        try:
            await self.schedules.upsert_default_week(washer_id, working_days)
        except SQLAlchemyError as e:
            raise StoreError("default_week_upsert_failed", e) from e

        try:
            await self.schedules.delete_default_weekdays(washer_id, off_weekdays)
        except SQLAlchemyError as e:
            raise StoreError("default_week_delete_failed", e) from e

        try:
            await self.schedules.upsert_exceptions(washer_id, plan.exceptions)
        except SQLAlchemyError as e:
            raise StoreError("exceptions_upsert_failed", e) from e

        created = await self.availability_service.regenerate_month(
            washer_id, plan.month_start, plan.month_end, plan.days
        )

        logger.info(
            "Saved schedule for washer %s (%s): %d working weekday(s), %d exception(s)",
            washer_id, request.month, len(working_days), len(plan.exceptions),
        )
        return ScheduleSaveResponse(
            washer_id=washer_id,
            month=request.month,
            blocks_created=created,
        )
