"""Data models for HUST courses and semesters."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class CourseSchedule:
    """One weekly slot of a course."""

    day: int  # 2-8: Monday-Sunday
    start_period: int  # 1-14, or HHMM when >= 100
    end_period: int
    room: str = field(default="")
    weeks: tuple[int, ...] = field(default=())  # 1-based, caller order kept
    week_label: str = field(default="")  # e.g. "2-9,11-19"

    def __post_init__(self) -> None:
        object.__setattr__(self, "weeks", tuple(self.weeks))


@dataclass(frozen=True)
class Course:
    """A registered class with its weekly schedule slots."""

    name: str
    code: str  # e.g. MI3080
    class_id: str = field(default="")
    class_type: str = field(default="")  # LT+BT, TN, DA, ...
    credits: str = field(default="")
    teachers: tuple[str, ...] = field(default=())
    schedules: tuple[CourseSchedule, ...] = field(default=())

    def __post_init__(self) -> None:
        object.__setattr__(self, "teachers", tuple(self.teachers))
        object.__setattr__(self, "schedules", tuple(self.schedules))


@dataclass(frozen=True)
class Semester:
    """Semester with the instant its first week starts."""

    id: str
    label: str  # e.g. "20241"
    start_timestamp: int  # epoch milliseconds
    end_timestamp: Optional[int] = field(default=None)
    is_current: bool = field(default=False)


@dataclass(frozen=True)
class StudentProfile:
    """Signed-in student as reported by the session endpoint."""

    student_id: str
    full_name: str = field(default="")
