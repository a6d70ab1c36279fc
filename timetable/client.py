"""Browser-session client for the HUST student portal API."""

import json
import logging
from typing import Any, Optional
from urllib.parse import urlencode

from selenium import webdriver
from selenium.common.exceptions import TimeoutException, WebDriverException
from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.support.ui import WebDriverWait

from .api_parser import parse_courses, parse_semesters, parse_session
from .models import Course, Semester, StudentProfile

LOG = logging.getLogger(__name__)


class HustApiError(RuntimeError):
    """Raised when the portal API cannot be reached or returns an error."""


_READ_TOKEN_JS = "return window.localStorage.getItem('accessToken');"

# Runs inside the portal page so the session cookies go along.
_FETCH_JS = """
const [url, token, done] = arguments;
fetch(url, {
    method: 'GET',
    headers: {
        'Content-Type': 'application/json',
        'Authorization': 'Bearer ' + (token || '')
    },
    credentials: 'include'
})
    .then(r => r.text().then(body => done({status: r.status, body: body})))
    .catch(e => done({status: 0, body: String(e)}));
"""


class HustClient:
    """Client for the HUST student portal API.

    The portal keeps its bearer token in the page's localStorage after the
    user signs in, so a Chrome window is opened on the portal and API calls
    are issued from inside the page. Use as a context manager so the browser
    is always closed.
    """

    BASE_URL = "https://student.hust.edu.vn"
    WAIT_TIMEOUT = 15
    LOGIN_TIMEOUT = 300

    def __init__(self, headless: bool = False, profile_dir: Optional[str] = None) -> None:
        """Initialize the client.

        Args:
            headless: Run browser in headless mode. Only useful together
                with a profile that is already signed in.
            profile_dir: Chrome user data directory to reuse a session.
        """
        self._headless = headless
        self._profile_dir = profile_dir
        self._driver: Optional[webdriver.Chrome] = None
        self._token: Optional[str] = None

    def __enter__(self) -> "HustClient":
        self.open()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _init_driver(self) -> webdriver.Chrome:
        """Initialize Chrome WebDriver with appropriate options."""
        options = ChromeOptions()
        if self._headless:
            options.add_argument("--headless=new")
        if self._profile_dir:
            options.add_argument(f"--user-data-dir={self._profile_dir}")
        options.add_argument("--no-sandbox")
        options.add_argument("--disable-dev-shm-usage")
        options.add_argument("--window-size=1280,900")
        options.add_argument("--lang=vi-VN")

        return webdriver.Chrome(options=options)

    def _wait_for_token(self) -> str:
        """Wait until the user has signed in and the token is stored."""
        if not self._driver:
            raise RuntimeError("Browser is not open. Call open() first.")

        try:
            return WebDriverWait(self._driver, self.LOGIN_TIMEOUT).until(
                lambda driver: driver.execute_script(_READ_TOKEN_JS)
            )
        except TimeoutException:
            raise HustApiError(
                f"No sign-in detected within {self.LOGIN_TIMEOUT} seconds"
            ) from None

    def open(self) -> None:
        """Open the portal and wait for an authenticated session."""
        self._driver = self._init_driver()
        self._driver.set_script_timeout(self.WAIT_TIMEOUT)
        try:
            LOG.debug("Opening %s", self.BASE_URL)
            self._driver.get(self.BASE_URL)
            self._token = self._wait_for_token()
        except Exception:
            self.close()
            raise

    def close(self) -> None:
        if self._driver:
            self._driver.quit()
            self._driver = None
        self._token = None

    def _get_json(self, path: str, params: Optional[dict[str, str]] = None) -> Any:
        """Issue a GET request from the portal page and decode the JSON body.

        Raises:
            HustApiError: On network failure, non-2xx status or invalid JSON.
        """
        if not self._driver:
            raise RuntimeError("Browser is not open. Call open() first.")

        url = f"{self.BASE_URL}{path}"
        if params:
            url = f"{url}?{urlencode(params)}"
        LOG.debug("GET %s", url)

        try:
            response = self._driver.execute_async_script(_FETCH_JS, url, self._token)
        except WebDriverException as e:
            raise HustApiError(f"Request to {path} failed: {e.msg}") from e

        status = response.get("status", 0)
        body = response.get("body", "")
        if not 200 <= status < 300:
            raise HustApiError(f"HTTP error {status} from {path}")

        try:
            return json.loads(body)
        except json.JSONDecodeError as e:
            raise HustApiError(f"Invalid JSON from {path}: {e}") from e

    def fetch_profile(self) -> Optional[StudentProfile]:
        """Fetch the signed-in student's ID and name."""
        return parse_session(self._get_json("/api/v1/auth/session"))

    def fetch_semesters(self) -> list[Semester]:
        """Fetch the semester list."""
        return parse_semesters(self._get_json("/api/v1/semesters"))

    def fetch_timetable(self, semester: str, student_id: str) -> list[Course]:
        """Fetch and parse a student's timetable for one semester.

        Args:
            semester: Semester label, e.g. "20241".
            student_id: Student ID.

        Returns:
            List of Course objects.
        """
        if not semester or not student_id:
            raise ValueError("Missing semester or studentId")

        data = self._get_json(
            "/api/v2/timetables/student-timetable",
            {"semester": semester, "studentId": student_id},
        )
        courses = parse_courses(data)
        LOG.info("Fetched %d courses for %s in %s", len(courses), student_id, semester)
        return courses
