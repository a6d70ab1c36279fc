"""Tests for transformer/dates.py."""
import unittest
from datetime import date, datetime, time, timedelta, timezone

from tests.fixtures import SEMESTER_START
from transformer.dates import (
    TIMEZONE,
    combine_date_and_time,
    date_to_timestamp,
    expand_event_dates,
    find_first_occurrence,
    semester_start_date,
)
from transformer.errors import InvalidDay


class TestSemesterStartDate(unittest.TestCase):
    def test_round_trip_through_timestamp(self):
        self.assertEqual(semester_start_date(date_to_timestamp(SEMESTER_START)), SEMESTER_START)

    def test_uses_local_date(self):
        # 2024-09-08 18:00 UTC is already 2024-09-09 in UTC+7
        ts = int(datetime(2024, 9, 8, 18, 0, tzinfo=timezone.utc).timestamp() * 1000)
        self.assertEqual(semester_start_date(ts), date(2024, 9, 9))


class TestFindFirstOccurrence(unittest.TestCase):
    def test_same_weekday(self):
        self.assertEqual(find_first_occurrence(SEMESTER_START, 1), SEMESTER_START)

    def test_later_in_week(self):
        self.assertEqual(find_first_occurrence(SEMESTER_START, 7), date(2024, 9, 15))

    def test_start_on_sunday(self):
        sunday = date(2024, 9, 8)
        self.assertEqual(find_first_occurrence(sunday, 7), sunday)
        self.assertEqual(find_first_occurrence(sunday, 1), date(2024, 9, 9))

    def test_wraps_to_next_week(self):
        wednesday = date(2024, 9, 11)
        self.assertEqual(find_first_occurrence(wednesday, 2), date(2024, 9, 17))


class TestExpandEventDates(unittest.TestCase):
    def setUp(self):
        self.start = date_to_timestamp(SEMESTER_START)

    def test_tuesday_weeks_one_and_three(self):
        dates = expand_event_dates(self.start, [1, 3], 3)
        first = SEMESTER_START + timedelta(days=1)
        self.assertEqual(dates, [first, first + timedelta(days=14)])

    def test_keeps_input_order(self):
        dates = expand_event_dates(self.start, [3, 1, 2], 2)
        self.assertEqual(dates, [date(2024, 9, 23), date(2024, 9, 9), date(2024, 9, 16)])

    def test_length_matches_weeks(self):
        for weeks in ([], [1], [1, 1], list(range(1, 19))):
            with self.subTest(weeks=weeks):
                self.assertEqual(len(expand_event_dates(self.start, weeks, 5)), len(weeks))

    def test_accepts_tuple(self):
        self.assertEqual(expand_event_dates(self.start, (2,), 8), [date(2024, 9, 22)])

    def test_invalid_day(self):
        with self.assertRaises(InvalidDay):
            expand_event_dates(self.start, [1], 9)

    def test_invalid_day_with_no_weeks_still_raises(self):
        with self.assertRaises(InvalidDay):
            expand_event_dates(self.start, [], 1)


class TestCombineDateAndTime(unittest.TestCase):
    def test_local_time_in_utc_plus_7(self):
        result = combine_date_and_time(date(2024, 9, 10), time(6, 45))
        self.assertEqual(result.tzinfo, TIMEZONE)
        self.assertEqual(result.utcoffset(), timedelta(hours=7))
        self.assertEqual((result.hour, result.minute), (6, 45))


if __name__ == "__main__":
    unittest.main(verbosity=2)
