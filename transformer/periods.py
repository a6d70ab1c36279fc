"""HUST class period timetable."""

from datetime import time
from types import MappingProxyType
from typing import NamedTuple

from .errors import InvalidPeriod


class PeriodTime(NamedTuple):
    """Clock start and end of a period or period range."""

    start: time
    end: time


CUSTOM_TIME_THRESHOLD = 100

# Official timetable, 45-minute periods.
PERIOD_TIMES = MappingProxyType({
    # Morning shift
    1: PeriodTime(time(6, 45), time(7, 30)),
    2: PeriodTime(time(7, 30), time(8, 15)),
    3: PeriodTime(time(8, 25), time(9, 10)),
    4: PeriodTime(time(9, 20), time(10, 5)),
    5: PeriodTime(time(10, 15), time(11, 0)),
    6: PeriodTime(time(11, 0), time(11, 45)),
    # Afternoon shift
    7: PeriodTime(time(12, 30), time(13, 15)),
    8: PeriodTime(time(13, 15), time(14, 0)),
    9: PeriodTime(time(14, 10), time(14, 55)),
    10: PeriodTime(time(15, 5), time(15, 50)),
    11: PeriodTime(time(16, 0), time(16, 45)),
    12: PeriodTime(time(16, 45), time(17, 30)),
    # Evening shift
    13: PeriodTime(time(17, 45), time(18, 30)),
    14: PeriodTime(time(18, 30), time(19, 15)),
})


def is_custom_time(period: int) -> bool:
    """Return True if the period is a literal HHMM time such as 1300."""
    return period >= CUSTOM_TIME_THRESHOLD


def _parse_custom_time(period: int) -> time:
    hours, minutes = divmod(period, 100)
    try:
        return time(hours, minutes)
    except ValueError:
        raise InvalidPeriod(period) from None


def get_period_time(period: int) -> PeriodTime:
    """Get the start and end time of a single period.

    Args:
        period: Standard period number (1-14) or custom HHMM time (>= 100).

    Returns:
        PeriodTime. For custom times start and end are the same instant;
        the real range comes from pairing two custom times.

    Raises:
        InvalidPeriod: If the period is not in the table and does not
            decode to a clock time.
    """
    if is_custom_time(period):
        clock = _parse_custom_time(period)
        return PeriodTime(clock, clock)

    try:
        return PERIOD_TIMES[period]
    except KeyError:
        raise InvalidPeriod(period) from None


def get_period_range(start_period: int, end_period: int) -> PeriodTime:
    """Get the time range of a class spanning several periods.

    Each endpoint is resolved on its own: the start of ``start_period`` and
    the end of ``end_period``. No check is made that the two form a forward
    interval.
    """
    return PeriodTime(
        get_period_time(start_period).start,
        get_period_time(end_period).end,
    )
