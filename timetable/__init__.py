"""Timetable module for HUST course data and its acquisition."""

from .api_parser import current_semester, load_courses, parse_courses, parse_semesters
from .models import Course, CourseSchedule, Semester, StudentProfile

__all__ = [
    "Course",
    "CourseSchedule",
    "Semester",
    "StudentProfile",
    "current_semester",
    "load_courses",
    "parse_courses",
    "parse_semesters",
]
