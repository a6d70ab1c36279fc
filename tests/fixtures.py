"""Shared test data and helpers."""
import io
from contextlib import contextmanager, redirect_stderr, redirect_stdout
from datetime import date

from timetable.models import Course, CourseSchedule, Semester
from transformer.dates import date_to_timestamp

# Monday
SEMESTER_START = date(2024, 9, 9)


def make_semester(start: date = SEMESTER_START, label: str = "20241") -> Semester:
    return Semester(id=label, label=label, start_timestamp=date_to_timestamp(start))


def make_schedule(**overrides) -> CourseSchedule:
    values = dict(
        day=3,
        start_period=1,
        end_period=3,
        room="D9-301",
        weeks=(1, 2, 3),
        week_label="1-3",
    )
    values.update(overrides)
    return CourseSchedule(**values)


def make_course(**overrides) -> Course:
    values = dict(
        name="Giai tich II",
        code="MI1121",
        class_id="163631",
        class_type="LT+BT",
        credits="3(2-2-0-6)",
        teachers=("Nguyen Van A",),
        schedules=(make_schedule(),),
    )
    values.update(overrides)
    return Course(**values)


RAW_TIMETABLE = [
    {
        "id": 1,
        "courseId": "MI1121",
        "courseName": "Giai tich II",
        "classId": 163631,
        "classType": "LT+BT",
        "semester": "20241",
        "creditInfo": "3(2-2-0-6)",
        "notes": "",
        "_teachers": [{"id": 7, "fullName": "Nguyen Van A"}, {"id": 8, "fullName": "Tran Thi B"}],
        "_calendars": [
            {
                "id": 11, "place": "D9-301", "week": "1-3", "day": 2,
                "from": 1, "to": 3, "dayTime": 1, "weeks": [1, 2, 3], "status": 1,
            },
            {
                "id": 12, "place": "TC-205", "week": "2,4", "day": 4,
                "from": 1, "to": 2, "dayTime": 2, "weeks": [2, 4], "status": 1,
            },
        ],
    },
    {
        "id": 2,
        "courseId": "IT3080",
        "courseName": "Mang may tinh",
        "classId": "150022",
        "classType": "TN",
        "semester": "20241",
        "creditInfo": "3(3-1-0-6)",
        "notes": "",
        "_teachers": [],
        "_calendars": [
            {
                "id": 21, "place": "B1-203", "week": "5", "day": 6,
                "from": 1300, "to": 1530, "dayTime": 2, "weeks": [5], "status": 1,
            },
        ],
    },
]


@contextmanager
def capture_stdout():
    buf = io.StringIO()
    with redirect_stdout(buf):
        yield buf


@contextmanager
def capture_stderr():
    buf = io.StringIO()
    with redirect_stderr(buf):
        yield buf
