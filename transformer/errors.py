"""Errors raised while resolving schedule slots into calendar times."""


class ScheduleError(ValueError):
    """Base class for invalid schedule input."""

    kind = "ScheduleError"


class InvalidPeriod(ScheduleError):
    """Period index is neither a table period nor a valid HHMM time."""

    kind = "InvalidPeriod"

    def __init__(self, period: int) -> None:
        self.period = period
        super().__init__(
            f"Invalid period number: {period}. "
            "Valid range is 1-14 or a 4-digit HHMM time."
        )


class InvalidDay(ScheduleError):
    """Day code is outside the HUST range 2 (Monday) to 8 (Sunday)."""

    kind = "InvalidDay"

    def __init__(self, day: int) -> None:
        self.day = day
        super().__init__(f"Invalid HUST day: {day}. Valid range is 2-8.")
