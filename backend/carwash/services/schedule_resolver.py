"""
Schedule resolution and weekly-hours validation.

Pure functions: no store access, safe to run for previews. Weekdays are
numbered 0 = Sunday .. 6 = Saturday and weeks start on Sunday.
"""
from collections import OrderedDict
from datetime import date, timedelta
from typing import Any, Dict, Iterable, Iterator, List, Optional

from carwash.core.config import settings
from carwash.models.schedule import ApprovalStatus
from carwash.schemas.schedule import EffectiveDay, WeekFailure, WeeklyHoursResult
from carwash.utils.parsing import hours_between


def sunday_weekday(day: date) -> int:
    """Weekday with Sunday as 0 (Python's date.weekday() has Monday as 0)."""
    return (day.weekday() + 1) % 7


def week_start(day: date) -> date:
    """The Sunday on or before ``day``."""
    return day - timedelta(days=sunday_weekday(day))


def iter_dates(start: date, end: date) -> Iterator[date]:
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def resolve_month(
    weekly_template: Iterable[Any],
    exceptions: Iterable[Any],
    month_start: date,
    month_end: date,
    default_zip: str,
) -> List[EffectiveDay]:
    """
    Overlay date exceptions on the weekly template for every day in
    [month_start, month_end].

    ``weekly_template`` rows need ``weekday``, ``is_working``, ``start_time``,
    ``end_time`` and ``zip``; ``exceptions`` need ``service_date``,
    ``is_day_off``, ``start_time``, ``end_time``, ``zip`` and
    ``approval_status``. Stored rows and request schemas both qualify.
    A later exception for the same date replaces an earlier one.
    """
    template: Dict[int, Any] = {}
    for row in weekly_template:
        template.setdefault(int(row.weekday), row)

    overrides: Dict[date, Any] = {}
    for ex in exceptions:
        if ex.service_date is not None:
            overrides[ex.service_date] = ex

    days: List[EffectiveDay] = []
    for day in iter_dates(month_start, month_end):
        weekday = sunday_weekday(day)
        base = template.get(weekday)

        is_working = bool(base is not None and base.is_working)
        start_time = base.start_time if base is not None else None
        end_time = base.end_time if base is not None else None
        zip_code = (base.zip if base is not None else None) or default_zip

        ex = overrides.get(day)
        if ex is not None and ex.approval_status != ApprovalStatus.REJECTED:
            if ex.is_day_off:
                is_working = False
                start_time = None
                end_time = None
            else:
                is_working = True
                start_time = ex.start_time or start_time
                end_time = ex.end_time or end_time
            if ex.zip:
                zip_code = ex.zip

        days.append(EffectiveDay(
            service_date=day,
            weekday=weekday,
            is_working=is_working,
            start_time=start_time,
            end_time=end_time,
            zip=zip_code,
            hours=hours_between(start_time, end_time) if is_working else 0.0,
        ))

    return days


def validate_weekly_hours(
    days: Iterable[EffectiveDay],
    minimum_hours: Optional[float] = None,
) -> WeeklyHoursResult:
    """
    Sum hours per Sunday-anchored week and report every week under the
    minimum (settings.min_weekly_hours unless given).
    """
    minimum = settings.min_weekly_hours if minimum_hours is None else minimum_hours

    totals: "OrderedDict[date, float]" = OrderedDict()
    for day in days:
        key = week_start(day.service_date)
        totals[key] = totals.get(key, 0.0) + (day.hours or 0.0)

    failures = [
        WeekFailure(week_start=start, hours=round(hours, 2))
        for start, hours in sorted(totals.items())
        if hours < minimum
    ]
    return WeeklyHoursResult(ok=not failures, failures=failures)
