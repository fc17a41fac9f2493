"""HTTP client for the task API."""

import logging
from typing import Any

import requests


logger = logging.getLogger(__name__)


class ApiError(Exception):
    """The API answered with a non-2xx status, or could not be reached."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ApiUnavailable(ApiError):
    """Connection failure or timeout; no response was received."""


class TaskApiClient:
    """Thin wrapper over the four task endpoints.

    Args:
        base_url: Root of the API, e.g. ``http://localhost:3000``.
        session: Optional ``requests.Session`` to reuse (tests pass a mock).
        timeout: Per-request timeout in seconds.
    """

    def __init__(self, base_url: str, session: requests.Session | None = None, timeout: float = 5.0):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def list_tasks(self) -> list[dict[str, Any]]:
        return self._request("GET", "/tasks")

    def create_task(self, content: str) -> dict[str, Any]:
        return self._request("POST", "/tasks", json={"content": content})

    def delete_task(self, task_id: str) -> None:
        self._request("DELETE", f"/tasks/{task_id}")

    def move_task(self, task_id: str, column: str) -> dict[str, Any]:
        return self._request("PUT", f"/tasks/{task_id}/move", json={"column": column})

    def _request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except (requests.ConnectionError, requests.Timeout) as exc:
            logger.warning(f"API unreachable: {method} {url}: {exc}")
            raise ApiUnavailable(f"API unreachable: {exc}") from exc

        if not response.ok:
            raise ApiError(_error_message(response), response.status_code)

        if response.status_code == 204 or not response.content:
            return None
        return response.json()


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return f"API error: {response.status_code}"
