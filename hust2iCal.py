#!/usr/bin/env python3
"""HUST schedule to iCalendar converter.

ETL pipeline that loads the student timetable from the HUST portal API
(or a saved JSON response) and generates an iCalendar (.ics) file.
"""

import argparse
import logging
import sys
from datetime import date, datetime
from typing import Optional

from timetable import Course, Semester, current_semester, load_courses
from timetable.api_parser import find_semester
from timetable.client import HustApiError, HustClient
from transformer import ICalTransformer
from transformer.dates import date_to_timestamp, semester_start_date


def parse_date(date_str: str) -> date:
    """Parse date string in YYYY-MM-DD format."""
    try:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Invalid date format: '{date_str}'. Expected YYYY-MM-DD."
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Convert HUST class schedule to iCalendar format.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python3 hust2iCal.py --semester 20241
  python3 hust2iCal.py --input timetable.json --semester 20241 --start-date 2024-09-09
  python3 hust2iCal.py --profile-dir ~/.hust-chrome --headless -o my_schedule.ics
        """
    )

    parser.add_argument(
        "-i", "--input",
        default=None,
        help="Saved timetable JSON response; skips the browser fetch"
    )

    parser.add_argument(
        "--semester",
        default=None,
        help="Semester label, e.g. 20241. Default: the current semester"
    )

    parser.add_argument(
        "--student-id",
        default=None,
        help="Student ID. Default: the signed-in student"
    )

    parser.add_argument(
        "--start-date",
        type=parse_date,
        default=None,
        help="First day of week 1 (format: YYYY-MM-DD). "
             "Required with --input, otherwise taken from the portal"
    )

    parser.add_argument(
        "-o", "--output",
        default=None,
        help="Output file path (default: hust_schedule_<semester>.ics)"
    )

    parser.add_argument(
        "--profile-dir",
        default=None,
        help="Chrome user data directory to reuse a signed-in session"
    )

    parser.add_argument(
        "--headless",
        action="store_true",
        help="Run Chrome headless (needs a signed-in --profile-dir)"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    return parser


def output_path_for(output: Optional[str], semester: Semester) -> str:
    """Resolve the output path, ensuring an .ics extension."""
    output_path = output or f"hust_schedule_{semester.label or 'export'}.ics"
    if not output_path.lower().endswith(".ics"):
        output_path = f"{output_path}.ics"
    return output_path


def load_offline(args: argparse.Namespace) -> tuple[list[Course], Semester]:
    """Load courses from a JSON file; the semester comes from the flags."""
    if args.start_date is None:
        raise ValueError("--start-date is required with --input")

    courses = load_courses(args.input)
    label = args.semester or ""
    semester = Semester(
        id=label,
        label=label,
        start_timestamp=date_to_timestamp(args.start_date),
    )
    return courses, semester


def fetch_online(args: argparse.Namespace) -> tuple[list[Course], Semester]:
    """Fetch profile, semester and timetable through a browser session."""
    print("Opening HUST portal. Sign in in the browser window if asked.")

    with HustClient(headless=args.headless, profile_dir=args.profile_dir) as client:
        student_id = args.student_id
        if not student_id:
            profile = client.fetch_profile()
            if profile is None:
                raise ValueError("Could not fetch profile; pass --student-id")
            student_id = profile.student_id
            print(f"Signed in as: {profile.full_name} ({student_id})")

        semesters = client.fetch_semesters()
        if args.semester:
            semester = find_semester(semesters, args.semester)
            if semester is None:
                raise ValueError(f"Unknown semester: {args.semester}")
        else:
            semester = current_semester(semesters)
            if semester is None:
                raise ValueError("No semesters returned by the portal")

        courses = client.fetch_timetable(semester.label, student_id)

    if args.start_date is not None:
        semester = Semester(
            id=semester.id,
            label=semester.label,
            start_timestamp=date_to_timestamp(args.start_date),
            end_timestamp=semester.end_timestamp,
            is_current=semester.is_current,
        )
    return courses, semester


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the ETL pipeline."""
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s: %(message)s"
        )

    try:
        if args.input:
            courses, semester = load_offline(args)
        else:
            courses, semester = fetch_online(args)

        total = sum(len(course.schedules) for course in courses)
        print(f"Found {len(courses)} courses with {total} weekly slots.")

        if not courses:
            print("Warning: No courses found. The calendar will have no events.")

        output_path = output_path_for(args.output, semester)

        transformer = ICalTransformer()
        transformer.transform(courses, semester)
        transformer.save(output_path)

        print(f"Schedule saved to: {output_path}")
        print(f"Semester {semester.label} starting {semester_start_date(semester.start_timestamp)}")

    except KeyboardInterrupt:
        print("\nOperation cancelled by user.", file=sys.stderr)
        return 130
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except HustApiError as e:
        print(f"Error: HUST portal request failed: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error: An unexpected error occurred: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
