"""iCalendar transformer for HUST course schedules."""

import logging
import re
from datetime import date, datetime, timedelta, timezone
from typing import Optional

from icalendar import Alarm, Calendar, Event, Timezone, TimezoneStandard, vText

from timetable.models import Course, CourseSchedule, Semester
from .base import BaseTransformer, TransformResult
from .dates import TIMEZONE_ID, combine_date_and_time, expand_event_dates
from .errors import ScheduleError
from .periods import get_period_range

LOG = logging.getLogger(__name__)

_ESCAPES = {"\\": "\\\\", ";": "\\;", ",": "\\,", "\n": "\\n"}
_ESCAPE_SEQUENCE = re.compile(r"\\([\\;,nN])")


def escape_text(text: str) -> str:
    """Escape a free-text value: backslash, semicolon, comma and newline."""
    text = text.replace("\r\n", "\n")
    return "".join(_ESCAPES.get(char, char) for char in text)


def unescape_text(text: str) -> str:
    """Reverse escape_text in a single left-to-right pass."""
    return _ESCAPE_SEQUENCE.sub(
        lambda m: "\n" if m.group(1) in "nN" else m.group(1),
        text
    )


class EscapedText(vText):
    """TEXT value serialized with escape_text."""

    def to_ical(self) -> bytes:
        return escape_text(str(self)).encode("utf-8")


class ICalTransformer(BaseTransformer):
    """Transformer that converts HUST courses to iCalendar format.

    Every class occurrence becomes its own VEVENT; weeks are listed
    explicitly by the portal, so no RRULE is used.
    """

    TIMEZONE_ID = TIMEZONE_ID
    TIMEZONE_NAME = "+07"
    UTC_OFFSET = timedelta(hours=7)
    PRODID = "-//HUST Assistant//Schedule Exporter//EN"
    CALENDAR_NAME = "HUST Schedule"
    CALENDAR_DESCRIPTION = "Class schedule exported from HUST e.hust.edu.vn"
    UID_DOMAIN = "hust-assistant"
    REMINDER_MINUTES = 15

    def __init__(self, created_at: Optional[datetime] = None) -> None:
        """Initialize the iCalendar transformer.

        Args:
            created_at: Value for DTSTAMP. Defaults to the current time,
                pass a fixed value for reproducible output.
        """
        self._calendar: Optional[Calendar] = None
        self._created_at = created_at

    def _generate_uid(self, course: Course, start: datetime) -> str:
        """Generate a unique identifier for one occurrence.

        Args:
            course: The course.
            start: Start of the occurrence.

        Returns:
            Unique identifier string.
        """
        timestamp = int(start.timestamp() * 1000)
        return f"{course.code}-{timestamp}@{self.UID_DOMAIN}"

    @staticmethod
    def _build_description(course: Course) -> str:
        parts = [
            f"Course Code: {course.code}",
            f"Class ID: {course.class_id}",
            f"Type: {course.class_type}",
            f"Credits: {course.credits}",
        ]
        if course.teachers:
            parts.append(f"Teachers: {', '.join(course.teachers)}")
        return "\n".join(parts)

    def _build_alarm(self, summary: str) -> Alarm:
        alarm = Alarm()
        alarm.add("action", "DISPLAY")
        alarm.add("description", EscapedText(summary))
        alarm.add("trigger", timedelta(minutes=-self.REMINDER_MINUTES))
        return alarm

    def _build_timezone(self) -> Timezone:
        """Fixed-offset VTIMEZONE; the zone has no daylight saving."""
        standard = TimezoneStandard()
        standard.add("dtstart", datetime(1970, 1, 1))
        standard.add("tzoffsetfrom", self.UTC_OFFSET)
        standard.add("tzoffsetto", self.UTC_OFFSET)
        standard.add("tzname", self.TIMEZONE_NAME)

        tz = Timezone()
        tz.add("tzid", self.TIMEZONE_ID)
        tz.add_component(standard)
        return tz

    def _stamp(self) -> datetime:
        return self._created_at or datetime.now(timezone.utc)

    def serialize_event(
        self,
        course: Course,
        schedule: CourseSchedule,
        event_date: date
    ) -> Event:
        """Build the VEVENT for a single class occurrence.

        Args:
            course: The course.
            schedule: The weekly slot the occurrence belongs to.
            event_date: Date of the occurrence.

        Returns:
            iCalendar Event with a reminder alarm.

        Raises:
            InvalidPeriod: If a period of the slot cannot be resolved.
        """
        period_range = get_period_range(schedule.start_period, schedule.end_period)
        start_datetime = combine_date_and_time(event_date, period_range.start)
        end_datetime = combine_date_and_time(event_date, period_range.end)

        summary = f"{course.name} ({course.code})"

        ical_event = Event()
        ical_event.add("uid", self._generate_uid(course, start_datetime))
        ical_event.add("dtstamp", self._stamp())
        ical_event.add("dtstart", start_datetime)
        ical_event.add("dtend", end_datetime)
        ical_event.add("summary", EscapedText(summary))
        ical_event.add("location", EscapedText(schedule.room))
        ical_event.add("description", EscapedText(self._build_description(course)))
        ical_event.add("status", "CONFIRMED")
        ical_event.add("transp", "OPAQUE")
        ical_event.add_component(self._build_alarm(summary))
        return ical_event

    def transform(self, courses: list[Course], semester: Semester) -> Calendar:
        """Transform courses into iCalendar format.

        Args:
            courses: Courses with their weekly schedules.
            semester: Semester whose start date anchors week 1.

        Returns:
            iCalendar Calendar object.

        Raises:
            InvalidPeriod: If any slot has an unknown period.
            InvalidDay: If any slot has an unknown day code.
        """
        self._calendar = None

        calendar = Calendar()
        calendar.add("prodid", self.PRODID)
        calendar.add("version", "2.0")
        calendar.add("calscale", "GREGORIAN")
        calendar.add("method", "PUBLISH")
        calendar.add("x-wr-calname", f"{self.CALENDAR_NAME} {semester.label}".rstrip())
        calendar.add("x-wr-timezone", self.TIMEZONE_ID)
        calendar.add("x-wr-caldesc", self.CALENDAR_DESCRIPTION)
        calendar.add_component(self._build_timezone())

        count = 0
        for course in courses:
            for schedule in course.schedules:
                event_dates = expand_event_dates(
                    semester.start_timestamp,
                    schedule.weeks,
                    schedule.day
                )
                for event_date in event_dates:
                    calendar.add_component(
                        self.serialize_event(course, schedule, event_date)
                    )
                    count += 1

        LOG.debug("Built %d events from %d courses", count, len(courses))
        self._calendar = calendar
        return calendar

    def try_transform(
        self,
        courses: list[Course],
        semester: Semester
    ) -> TransformResult[Calendar]:
        """Like transform(), but report invalid input as a failed result."""
        try:
            calendar = self.transform(courses, semester)
        except ScheduleError as e:
            return TransformResult(
                status="error",
                diagnostics={"kind": e.kind, "message": str(e)},
            )
        return TransformResult(status="success", payload=calendar)

    def to_ical(self) -> bytes:
        """Serialize the last built calendar.

        Raises:
            RuntimeError: If transform() hasn't been called yet.
        """
        if self._calendar is None:
            raise RuntimeError("No calendar data. Call transform() first.")
        return self._calendar.to_ical()

    def save(self, output_path: str) -> None:
        """Save the calendar to an .ics file.

        Args:
            output_path: Path to the output file.

        Raises:
            RuntimeError: If transform() hasn't been called yet.
        """
        data = self.to_ical()
        with open(output_path, "wb") as f:
            f.write(data)


def build_document(
    courses: list[Course],
    semester: Semester,
    created_at: Optional[datetime] = None
) -> str:
    """Build the full .ics document text for a semester's courses."""
    transformer = ICalTransformer(created_at=created_at)
    transformer.transform(courses, semester)
    return transformer.to_ical().decode("utf-8")
