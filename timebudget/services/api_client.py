"""
HTTP client for the time-tracking REST API.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from timebudget.models.time_entry import NewTimeEntry
from timebudget.utils.logging_utils import sanitize_sensitive_data

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Raised when the REST API cannot be reached or answers with an error."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class TimeTrackingApiClient:
    """
    Thin client for the projects, phases and time-entries endpoints.

    Features:
    - Shared ``requests.Session`` with optional bearer token
    - Configurable request timeout
    - Backend ``{"error": ...}`` bodies surfaced as ``ApiError`` messages
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the API client.

        Args:
            base_url: Root URL of the backend, e.g. "https://example.org"
            token: Optional bearer token
            timeout: Request timeout in seconds
            session: Custom session (mainly for tests)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update({"Accept": "application/json"})
        if token:
            self._session.headers.update({"Authorization": f"Bearer {token}"})

        logger.debug(
            f"API client initialized for {self.base_url} with headers "
            f"{sanitize_sensitive_data(dict(self._session.headers))}"
        )

    def _request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self._session.request(
                method, url, timeout=self.timeout, **kwargs
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"{method} {path} failed: {e}")
            raise ApiError(f"Request to {path} failed: {e}") from e

        if not response.ok:
            message = self._error_message(response)
            logger.error(f"{method} {path} returned {response.status_code}: {message}")
            raise ApiError(message, status_code=response.status_code)

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ApiError(
                f"Invalid JSON from {path}", status_code=response.status_code
            ) from e

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
        text = (response.text or "").strip()
        return text or f"HTTP {response.status_code}"

    def _get_list(self, path: str) -> List[Dict[str, Any]]:
        data = self._request("GET", path)
        if data is None:
            return []
        if not isinstance(data, list):
            raise ApiError(f"Expected a list from {path}, got {type(data).__name__}")
        return data

    def list_projects(self) -> List[Dict[str, Any]]:
        """Fetch raw project records."""
        return self._get_list("/api/projects")

    def list_phases(self) -> List[Dict[str, Any]]:
        """Fetch raw phase records (``code``, ``name``, ``sort_order``)."""
        return self._get_list("/api/phases")

    def list_time_entries(self) -> List[Dict[str, Any]]:
        """Fetch raw time-entry records, newest first."""
        return self._get_list("/api/time-entries")

    def create_time_entry(self, entry: NewTimeEntry) -> Dict[str, Any]:
        """
        Create one time entry.

        Args:
            entry: Validated creation payload

        Returns:
            The created record as returned by the backend

        Raises:
            ApiError: If the backend rejects the entry or is unreachable
        """
        created = self._request("POST", "/api/time-entries", json=entry.to_payload())
        logger.debug(
            f"Created time entry for project {entry.project_id} on {entry.occurred_on}"
        )
        return created or {}
