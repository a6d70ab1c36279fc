"""Conversion between HUST day codes and ISO weekdays."""

from .errors import InvalidDay

DAY_NAMES = (
    "Monday", "Tuesday", "Wednesday", "Thursday",
    "Friday", "Saturday", "Sunday",
)

MIN_DAY_CODE = 2
MAX_DAY_CODE = 8


def to_weekday(day_code: int) -> int:
    """Convert a HUST day code (2=Monday .. 8=Sunday) to an ISO weekday (1-7).

    Raises:
        InvalidDay: If the day code is outside 2-8.
    """
    if not MIN_DAY_CODE <= day_code <= MAX_DAY_CODE:
        raise InvalidDay(day_code)
    return day_code - 1


def day_name(day_code: int) -> str:
    """English weekday name for a HUST day code."""
    return DAY_NAMES[to_weekday(day_code) - 1]
