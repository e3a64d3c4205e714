"""
TestDesk API client.

A thin httpx wrapper used by frontends and scripts. Session state (token,
role, display name) lives in an explicit `ApiSession` handed to the client
rather than in global storage. A 401 from the server clears the session and
invokes the `on_logout` callback, which a UI uses to show its login view.
"""

from typing import Callable, Optional

import httpx
from pydantic import BaseModel

from testdesk.logging_config import get_logger, log_with_context

logger = get_logger("client")

DEFAULT_ERROR_MESSAGE = "API Request Failed"


class ApiSession(BaseModel):
    """Credentials of the logged-in user."""
    token: Optional[str] = None
    role: Optional[str] = None
    name: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def clear(self):
        self.token = None
        self.role = None
        self.name = None


class ApiError(Exception):
    """Non-2xx response other than 401, carrying the server's message."""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ApiClient:
    """
    Client for the TestDesk REST API.

    Args:
        base_url: API root including the /api prefix, e.g. http://localhost:8000/api
        session: Session holding the bearer token; a fresh one when omitted
        on_logout: Called after a 401 or an explicit logout
        client: httpx.Client to send requests with (tests pass a TestClient)
    """

    def __init__(self, base_url: str, session: ApiSession = None,
                 on_logout: Callable[[], None] = None,
                 client: httpx.Client = None, timeout: float = 30.0):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else ApiSession()
        self.on_logout = on_logout
        self._client = client if client is not None else httpx.Client(timeout=timeout)

    def get_headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        if self.session.token:
            headers["Authorization"] = f"Bearer {self.session.token}"
        return headers

    def request(self, endpoint: str, method: str = "GET", json: dict = None,
                headers: dict = None):
        """
        Send a request and return the parsed JSON body.

        Returns None after a 401 (the session has been cleared by then).

        Raises:
            ApiError: the server answered with any other non-2xx status
            httpx.HTTPError: the request could not be sent
        """
        url = f"{self.base_url}{endpoint}"
        try:
            response = self._client.request(
                method, url, json=json, headers={**self.get_headers(), **(headers or {})}
            )
        except httpx.HTTPError as e:
            log_with_context(logger, "ERROR", f"API Error [{endpoint}]: {e}")
            raise

        if response.status_code == 401:
            log_with_context(logger, "INFO", f"Session rejected by server [{endpoint}], logging out")
            self.logout()
            return None

        try:
            data = response.json()
        except ValueError:
            data = None

        if not response.is_success:
            message = DEFAULT_ERROR_MESSAGE
            if isinstance(data, dict) and data.get("error"):
                message = data["error"]
            log_with_context(logger, "WARNING", f"API Error [{endpoint}]: {message}",
                             extra_data={"status_code": response.status_code})
            raise ApiError(message, response.status_code)

        return data

    def close(self):
        self._client.close()

    # Auth

    def login(self, email: str, password: str):
        data = self.request("/auth/login", method="POST",
                            json={"email": email, "password": password})
        if data and data.get("token"):
            self.session.token = data["token"]
            self.session.role = data.get("role")
            self.session.name = data.get("name")
        return data

    def register(self, email: str, password: str, role: str):
        return self.request("/auth/register", method="POST",
                            json={"email": email, "password": password, "role": role})

    def logout(self):
        self.session.clear()
        if self.on_logout:
            self.on_logout()

    # Student

    def get_tests(self):
        return self.request("/student/tests")

    def get_test_details(self, test_id: int):
        return self.request(f"/test/{test_id}")

    def submit_test(self, submission_data: dict):
        """Submit `{"testId", "responses": [...], "timeTaken"}`."""
        return self.request("/student/submit", method="POST", json=submission_data)

    def get_result(self, submission_id: int):
        return self.request(f"/student/result/{submission_id}")

    # Creator

    def get_stats(self):
        return self.request("/creator/stats")
