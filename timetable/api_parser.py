"""Mapping of raw HUST API responses onto the timetable models."""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from .models import Course, CourseSchedule, Semester, StudentProfile

LOG = logging.getLogger(__name__)

AFTERNOON_DAY_TIME = 2
AFTERNOON_PERIOD_OFFSET = 6
CUSTOM_TIME_THRESHOLD = 100


def _period_offset(item: dict[str, Any]) -> int:
    """Afternoon slots number their periods 1-6 within the shift."""
    is_custom_time = item.get("from", 0) >= CUSTOM_TIME_THRESHOLD
    if not is_custom_time and item.get("dayTime") == AFTERNOON_DAY_TIME:
        return AFTERNOON_PERIOD_OFFSET
    return 0


def parse_schedule(item: dict[str, Any]) -> CourseSchedule:
    """Parse one ``_calendars`` entry."""
    offset = _period_offset(item)
    return CourseSchedule(
        day=int(item["day"]),
        start_period=int(item["from"]) + offset,
        end_period=int(item["to"]) + offset,
        room=item.get("place") or "",
        weeks=tuple(int(w) for w in item.get("weeks") or ()),
        week_label=item.get("week") or "",
    )


def parse_course(item: dict[str, Any]) -> Course:
    """Parse one course of the student timetable response."""
    teachers = tuple(t["fullName"] for t in item.get("_teachers") or ())
    schedules = tuple(parse_schedule(c) for c in item.get("_calendars") or ())
    return Course(
        name=item.get("courseName") or "",
        code=item.get("courseId") or item.get("courseCode") or "",
        class_id=str(item.get("classId") or ""),
        class_type=item.get("classType") or "",
        credits=item.get("creditInfo") or "",
        teachers=teachers,
        schedules=schedules,
    )


def parse_courses(data: list[dict[str, Any]]) -> list[Course]:
    """Parse the student timetable response.

    Args:
        data: Decoded JSON list returned by the timetable endpoint.

    Returns:
        List of Course objects in response order.

    Raises:
        ValueError: If the payload is not a list of course objects.
    """
    if not isinstance(data, list):
        raise ValueError("Timetable data must be a JSON list of courses")

    try:
        courses = [parse_course(item) for item in data]
    except (KeyError, TypeError) as e:
        raise ValueError(f"Malformed timetable entry: {e}") from e

    LOG.debug("Parsed %d courses", len(courses))
    return courses


def parse_semester(item: dict[str, Any]) -> Semester:
    """Parse one entry of the semester list."""
    label = str(item.get("semester") or "")
    return Semester(
        id=str(item.get("id") or label),
        label=label,
        start_timestamp=int(item["startDate"]),
        end_timestamp=int(item["endDate"]) if item.get("endDate") else None,
        is_current=bool(item.get("isCurrentForClass")),
    )


def parse_semesters(data: list[dict[str, Any]]) -> list[Semester]:
    """Parse the semester list, skipping entries without a start date."""
    semesters = []
    for item in data:
        if not item.get("startDate"):
            LOG.debug("Skipping semester without start date: %s", item.get("semester"))
            continue
        semesters.append(parse_semester(item))
    return semesters


def current_semester(semesters: list[Semester]) -> Optional[Semester]:
    """Pick the semester flagged current, else the one starting last."""
    for semester in semesters:
        if semester.is_current:
            return semester
    if not semesters:
        return None
    return max(semesters, key=lambda s: s.start_timestamp)


def find_semester(semesters: list[Semester], label: str) -> Optional[Semester]:
    """Find a semester by its label, e.g. "20241"."""
    for semester in semesters:
        if semester.label == label:
            return semester
    return None


def parse_session(data: dict[str, Any]) -> Optional[StudentProfile]:
    """Parse the auth session response into a StudentProfile."""
    user = (data or {}).get("user")
    if not user:
        return None
    return StudentProfile(
        student_id=str(user.get("studentId") or ""),
        full_name=user.get("fullName") or "",
    )


def load_courses(path: str) -> list[Course]:
    """Load courses from a saved timetable JSON file.

    Raises:
        ValueError: If the file is not valid timetable JSON.
    """
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from e
    return parse_courses(data)
