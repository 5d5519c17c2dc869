"""
Parsing helpers for the date, time, month and ZIP strings clients send.
"""
import calendar
import re
from datetime import date, time
from typing import Any, Optional, Tuple

_TIME_RE = re.compile(r"^(\d{2}):(\d{2})(?::(\d{2}))?$")
_MONTH_RE = re.compile(r"^(\d{4})-(\d{2})$")


def normalize_time(value: Any) -> Optional[time]:
    """
    Accept ``HH:MM`` or ``HH:MM:SS`` (or a ``time``) and return a ``time``.
    Anything else, including empty values, gives None.

    Examples:
        >>> normalize_time("09:30")
        datetime.time(9, 30)
        >>> normalize_time("9:30") is None
        True
    """
    if value is None:
        return None
    if isinstance(value, time):
        return value.replace(microsecond=0, tzinfo=None)
    match = _TIME_RE.match(str(value).strip())
    if not match:
        return None
    hours, minutes, seconds = int(match.group(1)), int(match.group(2)), int(match.group(3) or 0)
    if hours > 23 or minutes > 59 or seconds > 59:
        return None
    return time(hours, minutes, seconds)


def hours_between(start: Optional[time], end: Optional[time]) -> float:
    """Fractional hours from start to end at minute precision, never negative."""
    if start is None or end is None:
        return 0.0
    minutes = (end.hour * 60 + end.minute) - (start.hour * 60 + start.minute)
    return max(0, minutes) / 60


def parse_month(value: Optional[str]) -> Optional[Tuple[date, date]]:
    """``YYYY-MM`` to (first day, last day) of that month; None when malformed."""
    match = _MONTH_RE.match((value or "").strip())
    if not match:
        return None
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        return None
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def clean_zip(value: Any) -> str:
    """Trimmed ZIP string; empty when missing."""
    return str(value or "").strip()
