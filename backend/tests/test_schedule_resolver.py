"""Tests for month resolution and the weekly-hours check."""

from datetime import date, time

from carwash.models.schedule import ApprovalStatus
from carwash.schemas.schedule import ScheduleExceptionIn, WeeklyTemplateRowIn
from carwash.services.schedule_resolver import (
    resolve_month,
    sunday_weekday,
    validate_weekly_hours,
    week_start,
)

ZIP = "10001"


def mon_wed_template(start="10:00", end="15:00"):
    """Monday and Wednesday working, every other day off."""
    return [
        WeeklyTemplateRowIn(
            weekday=weekday,
            is_working=weekday in (1, 3),
            start_time=start if weekday in (1, 3) else None,
            end_time=end if weekday in (1, 3) else None,
            zip=ZIP,
        )
        for weekday in range(7)
    ]


def day(days, service_date):
    return next(d for d in days if d.service_date == service_date)


class TestWeekHelpers:
    def test_sunday_is_zero(self):
        assert sunday_weekday(date(2025, 6, 1)) == 0  # Sunday
        assert sunday_weekday(date(2025, 6, 2)) == 1
        assert sunday_weekday(date(2025, 6, 7)) == 6

    def test_week_start_is_previous_sunday(self):
        assert week_start(date(2025, 6, 4)) == date(2025, 6, 1)
        assert week_start(date(2025, 6, 1)) == date(2025, 6, 1)
        assert week_start(date(2025, 12, 3)) == date(2025, 11, 30)


class TestResolveMonth:
    def test_covers_every_day_of_month(self):
        days = resolve_month(mon_wed_template(), [], date(2025, 6, 1), date(2025, 6, 30), ZIP)
        assert len(days) == 30
        assert days[0].service_date == date(2025, 6, 1)
        assert days[-1].service_date == date(2025, 6, 30)

    def test_template_days(self):
        days = resolve_month(mon_wed_template(), [], date(2025, 6, 1), date(2025, 6, 30), ZIP)
        monday = day(days, date(2025, 6, 2))
        assert monday.is_working
        assert monday.start_time == time(10, 0)
        assert monday.end_time == time(15, 0)
        assert monday.hours == 5.0
        assert monday.zip == ZIP

        tuesday = day(days, date(2025, 6, 3))
        assert not tuesday.is_working
        assert tuesday.hours == 0.0

    def test_rejected_exception_is_ignored(self):
        exceptions = [ScheduleExceptionIn(
            service_date=date(2025, 6, 2),
            is_day_off=True,
            approval_status=ApprovalStatus.REJECTED,
        )]
        with_rejected = resolve_month(
            mon_wed_template(), exceptions, date(2025, 6, 1), date(2025, 6, 30), ZIP
        )
        template_only = resolve_month(
            mon_wed_template(), [], date(2025, 6, 1), date(2025, 6, 30), ZIP
        )
        assert day(with_rejected, date(2025, 6, 2)) == day(template_only, date(2025, 6, 2))

    def test_approved_day_off_clears_window(self):
        exceptions = [ScheduleExceptionIn(
            service_date=date(2025, 6, 2),
            is_day_off=True,
            start_time="09:00",
            end_time="17:00",
        )]
        days = resolve_month(mon_wed_template(), exceptions, date(2025, 6, 1), date(2025, 6, 30), ZIP)
        monday = day(days, date(2025, 6, 2))
        assert not monday.is_working
        assert monday.start_time is None
        assert monday.end_time is None
        assert monday.hours == 0.0

    def test_pending_exception_applies(self):
        exceptions = [ScheduleExceptionIn(
            service_date=date(2025, 6, 3),
            start_time="08:00",
            end_time="12:00",
            approval_status=ApprovalStatus.PENDING,
        )]
        days = resolve_month(mon_wed_template(), exceptions, date(2025, 6, 1), date(2025, 6, 30), ZIP)
        tuesday = day(days, date(2025, 6, 3))
        assert tuesday.is_working
        assert tuesday.hours == 4.0

    def test_exception_falls_back_to_template_window(self):
        exceptions = [ScheduleExceptionIn(service_date=date(2025, 6, 2), zip="10002")]
        days = resolve_month(mon_wed_template(), exceptions, date(2025, 6, 1), date(2025, 6, 30), ZIP)
        monday = day(days, date(2025, 6, 2))
        assert monday.start_time == time(10, 0)
        assert monday.end_time == time(15, 0)
        assert monday.zip == "10002"

    def test_later_exception_wins(self):
        exceptions = [
            ScheduleExceptionIn(service_date=date(2025, 6, 2), is_day_off=True),
            ScheduleExceptionIn(service_date=date(2025, 6, 2), start_time="11:00", end_time="13:00"),
        ]
        days = resolve_month(mon_wed_template(), exceptions, date(2025, 6, 1), date(2025, 6, 30), ZIP)
        monday = day(days, date(2025, 6, 2))
        assert monday.is_working
        assert monday.hours == 2.0

    def test_missing_template_uses_default_zip(self):
        days = resolve_month([], [], date(2025, 6, 1), date(2025, 6, 7), "00000")
        assert all(not d.is_working for d in days)
        assert all(d.zip == "00000" for d in days)


class TestValidateWeeklyHours:
    def test_truncated_last_week_fails(self):
        # June 2025 ends on Monday the 30th, so the last week has a single 5h day
        days = resolve_month(mon_wed_template(), [], date(2025, 6, 1), date(2025, 6, 30), ZIP)
        result = validate_weekly_hours(days)

        assert not result.ok
        assert len(result.failures) == 1
        assert result.failures[0].week_start == date(2025, 6, 29)
        assert result.failures[0].hours == 5.0

    def test_full_weeks_pass_at_exactly_minimum(self):
        # December 2025 runs Monday the 1st through Wednesday the 31st
        days = resolve_month(mon_wed_template(), [], date(2025, 12, 1), date(2025, 12, 31), ZIP)
        result = validate_weekly_hours(days)
        assert result.ok
        assert result.failures == []

    def test_failures_sorted_and_rounded(self):
        days = resolve_month(
            mon_wed_template(start="10:00", end="10:20"),
            [],
            date(2025, 6, 1),
            date(2025, 6, 21),
            ZIP,
        )
        result = validate_weekly_hours(days)
        assert [f.week_start for f in result.failures] == [
            date(2025, 6, 1), date(2025, 6, 8), date(2025, 6, 15),
        ]
        assert result.failures[0].hours == 0.67

    def test_custom_minimum(self):
        days = resolve_month(mon_wed_template(), [], date(2025, 6, 1), date(2025, 6, 30), ZIP)
        assert validate_weekly_hours(days, minimum_hours=5).ok
