"""Tests for timetable/client.py with a stand-in WebDriver."""
import json
import unittest
from unittest.mock import patch

from tests.fixtures import RAW_TIMETABLE
from timetable.client import HustApiError, HustClient


class FakeDriver:
    """Answers in-page fetches from a path -> (status, body) table."""

    def __init__(self, responses, token="tok"):
        self.responses = responses
        self.token = token
        self.requests = []
        self.visited = []
        self.quit_called = False

    def set_script_timeout(self, seconds):
        self.script_timeout = seconds

    def get(self, url):
        self.visited.append(url)

    def execute_script(self, script):
        return self.token

    def execute_async_script(self, script, url, token):
        self.requests.append((url, token))
        path = url.split("student.hust.edu.vn", 1)[1].split("?", 1)[0]
        status, body = self.responses.get(path, (404, ""))
        return {"status": status, "body": body}

    def quit(self):
        self.quit_called = True


def _client_with(driver):
    client = HustClient()
    patcher = patch.object(HustClient, "_init_driver", return_value=driver)
    patcher.start()
    client.open()
    patcher.stop()
    return client


class TestHustClient(unittest.TestCase):
    def test_open_reads_token(self):
        driver = FakeDriver({})
        client = _client_with(driver)
        self.assertEqual(driver.visited, [HustClient.BASE_URL])
        self.assertEqual(driver.script_timeout, HustClient.WAIT_TIMEOUT)
        client.close()
        self.assertTrue(driver.quit_called)

    def test_fetch_timetable(self):
        driver = FakeDriver({
            "/api/v2/timetables/student-timetable": (200, json.dumps(RAW_TIMETABLE)),
        })
        with patch.object(HustClient, "_init_driver", return_value=driver):
            with HustClient() as client:
                courses = client.fetch_timetable("20241", "20210001")
        self.assertEqual([c.code for c in courses], ["MI1121", "IT3080"])
        url, token = driver.requests[0]
        self.assertIn("semester=20241", url)
        self.assertIn("studentId=20210001", url)
        self.assertEqual(token, "tok")
        self.assertTrue(driver.quit_called)

    def test_fetch_profile_and_semesters(self):
        driver = FakeDriver({
            "/api/v1/auth/session": (200, json.dumps({"user": {"studentId": "1", "fullName": "A"}})),
            "/api/v1/semesters": (200, json.dumps([{"semester": "20241", "startDate": 1}])),
        })
        client = _client_with(driver)
        self.assertEqual(client.fetch_profile().student_id, "1")
        self.assertEqual([s.label for s in client.fetch_semesters()], ["20241"])
        client.close()

    def test_http_error(self):
        driver = FakeDriver({"/api/v1/semesters": (401, "")})
        client = _client_with(driver)
        with self.assertRaises(HustApiError):
            client.fetch_semesters()
        client.close()

    def test_invalid_json(self):
        driver = FakeDriver({"/api/v1/semesters": (200, "<html>")})
        client = _client_with(driver)
        with self.assertRaises(HustApiError):
            client.fetch_semesters()
        client.close()

    def test_missing_arguments(self):
        client = _client_with(FakeDriver({}))
        with self.assertRaises(ValueError):
            client.fetch_timetable("", "20210001")
        client.close()

    def test_request_before_open(self):
        with self.assertRaises(RuntimeError):
            HustClient().fetch_semesters()


if __name__ == "__main__":
    unittest.main(verbosity=2)
