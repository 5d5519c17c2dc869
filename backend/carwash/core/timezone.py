"""
Timezone utilities for the backend.
All timestamps should be stored as timezone-aware UTC.
"""
from datetime import date, datetime, time, timezone
from typing import Optional, Tuple

import pytz

from carwash.core.config import settings


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-aware datetime.

    This should be used instead of datetime.utcnow() which returns
    a naive datetime that can be misinterpreted by PostgreSQL.
    """
    return datetime.now(timezone.utc)


def service_datetime_to_utc(service_date: date, at: time, timezone_name: Optional[str] = None) -> datetime:
    """
    Combine a civil service date and time-of-day in the service timezone
    and return the matching UTC instant.

    Args:
        service_date: Calendar date of the wash
        at: Local time-of-day
        timezone_name: IANA timezone name, defaults to settings.service_timezone
    """
    tz = pytz.timezone(timezone_name or settings.service_timezone)
    local_dt = tz.localize(datetime.combine(service_date, at.replace(microsecond=0)))
    return local_dt.astimezone(pytz.UTC)


def utc_month_bounds(day: date) -> Tuple[datetime, datetime]:
    """
    Return [first-of-month 00:00 UTC, first-of-next-month 00:00 UTC) for the
    month containing ``day``.
    """
    start = datetime(day.year, day.month, 1, tzinfo=timezone.utc)
    if day.month == 12:
        end = datetime(day.year + 1, 1, 1, tzinfo=timezone.utc)
    else:
        end = datetime(day.year, day.month + 1, 1, tzinfo=timezone.utc)
    return start, end
