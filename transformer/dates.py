"""Date arithmetic for expanding weekly schedules into class dates."""

from datetime import date, datetime, time, timedelta
from typing import Iterable
from zoneinfo import ZoneInfo

from .days import to_weekday

TIMEZONE_ID = "Asia/Ho_Chi_Minh"
TIMEZONE = ZoneInfo(TIMEZONE_ID)  # UTC+7, no daylight saving


def semester_start_date(start_timestamp: int) -> date:
    """Calendar date of a semester start given in epoch milliseconds."""
    return datetime.fromtimestamp(start_timestamp / 1000, tz=TIMEZONE).date()


def date_to_timestamp(day: date) -> int:
    """Epoch milliseconds of local midnight on ``day``."""
    midnight = datetime.combine(day, time(0, 0), tzinfo=TIMEZONE)
    return int(midnight.timestamp() * 1000)


def find_first_occurrence(start_date: date, weekday: int) -> date:
    """Find the first date on or after start_date falling on an ISO weekday.

    Args:
        start_date: The earliest possible date.
        weekday: ISO weekday, 1=Monday .. 7=Sunday.

    Returns:
        Date of the first occurrence.
    """
    days_ahead = (weekday - start_date.isoweekday()) % 7
    return start_date + timedelta(days=days_ahead)


def expand_event_dates(
    start_timestamp: int,
    weeks: Iterable[int],
    day_code: int
) -> list[date]:
    """Calculate the dates a class takes place on.

    The first ``day_code`` weekday on or after the semester start is week 1.
    Dates are returned in the order of ``weeks``, which is not re-sorted.

    Args:
        start_timestamp: Semester start in epoch milliseconds.
        weeks: Week numbers (1-based) the class occurs in.
        day_code: HUST day code (2-8).

    Returns:
        One date per week number.

    Raises:
        InvalidDay: If the day code is outside 2-8.
    """
    first_date = find_first_occurrence(
        semester_start_date(start_timestamp),
        to_weekday(day_code)
    )
    return [first_date + timedelta(weeks=week - 1) for week in weeks]


def combine_date_and_time(day: date, clock: time) -> datetime:
    """Combine a date and clock time into an aware datetime in TIMEZONE."""
    return datetime.combine(day, clock, tzinfo=TIMEZONE)
