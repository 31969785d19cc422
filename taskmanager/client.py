"""
HTTP client for the task manager API.

Programmatic counterpart of the browser's auth and task services: it logs in
with the mock credential pair, keeps the returned token in memory, attaches
it as a ``Bearer`` header on every task call and unwraps the
``{"success": ..., "data": ...}`` envelope.

Failures are raised as :class:`ClientError`.  Authentication failures are
reported with generic wording so a UI built on top of the client never
reveals which of the two fields was wrong.

Example::

    client = TaskManagerClient("http://localhost:3001")
    client.login("admin", "changeme")
    task = client.add_task("Write release notes")
    client.toggle_task(task)
"""

from __future__ import annotations

import logging
from typing import Any

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 5.0
LARGE_TOKEN_WARNING_LENGTH = 8000
GENERIC_AUTH_MESSAGE = "Invalid username or password"


class ClientError(Exception):
    """A request to the API failed or returned an unexpected body."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        validation_errors: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.validation_errors = validation_errors or []


class TaskManagerClient:
    """
    Thin wrapper around :class:`requests.Session` for the task manager API.

    Args:
        base_url: Server root, e.g. ``"http://localhost:3001"``.
        timeout: Per-request timeout in seconds.
        session: Optional pre-configured session (useful for tests).
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {"Content-Type": "application/json", "Accept": "application/json"}
        )
        self._token: str | None = None

    # -----------------------------------------------------------------
    # Token handling
    # -----------------------------------------------------------------

    @property
    def token(self) -> str | None:
        return self._token

    @token.setter
    def token(self, value: str | None) -> None:
        if value and len(value) > LARGE_TOKEN_WARNING_LENGTH:
            logger.warning("Auth token is unusually large (%d characters)", len(value))
        self._token = value

    @property
    def is_authenticated(self) -> bool:
        return bool(self._token)

    def _auth_headers(self) -> dict[str, str]:
        if not self._token:
            return {}
        return {"Authorization": f"Bearer {self._token}"}

    # -----------------------------------------------------------------
    # Transport
    # -----------------------------------------------------------------

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _request(self, method: str, path: str, *, authenticated: bool = True, **kwargs) -> Any:
        headers = self._auth_headers() if authenticated else {}
        try:
            response = self.session.request(
                method,
                self._url(path),
                headers=headers,
                timeout=self.timeout,
                **kwargs,
            )
        except requests.RequestException as exc:
            logger.error("%s %s failed: %s", method, path, exc)
            raise ClientError(f"Could not reach the task manager API: {exc}") from exc

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.status_code >= 400:
            error = (body or {}).get("error") if isinstance(body, dict) else None
            error = error if isinstance(error, dict) else {}
            message = error.get("message") or f"Request failed with status {response.status_code}"
            logger.info("%s %s -> %s %s", method, path, response.status_code, message)
            raise ClientError(
                message,
                status_code=response.status_code,
                validation_errors=error.get("validationErrors"),
            )
        return body

    @staticmethod
    def _data(body: Any) -> Any:
        if not isinstance(body, dict) or "data" not in body:
            raise ClientError("Unexpected response from the task manager API")
        return body["data"]

    # -----------------------------------------------------------------
    # Auth
    # -----------------------------------------------------------------

    def login(self, username: str, password: str) -> dict[str, str]:
        """
        Log in and keep the returned token for later calls.

        Returns:
            ``{"username": username}`` for the signed-in user.

        Raises:
            ClientError: Credentials were rejected (generic message) or the
                server did not return a token string.
        """
        try:
            body = self._request(
                "POST",
                "/api/auth/login",
                authenticated=False,
                json={"username": username, "password": password},
            )
        except ClientError as exc:
            if exc.status_code in (400, 401):
                raise ClientError(GENERIC_AUTH_MESSAGE, status_code=exc.status_code) from exc
            raise

        token = body.get("token") if isinstance(body, dict) and body.get("success") else None
        if not token or not isinstance(token, str):
            raise ClientError("Invalid token received from server.")

        self.token = token
        return {"username": username}

    def logout(self) -> None:
        self.token = None

    # -----------------------------------------------------------------
    # Tasks
    # -----------------------------------------------------------------

    def list_tasks(self) -> list[dict[str, Any]]:
        return self._data(self._request("GET", "/api/tasks"))

    def get_task(self, task_id: int) -> dict[str, Any]:
        return self._data(self._request("GET", f"/api/tasks/{task_id}"))

    def add_task(self, text: str, description: str = "") -> dict[str, Any]:
        """Create a task from free text; blank text is rejected locally."""
        if not text or not text.strip():
            raise ClientError("Task text cannot be empty")
        body = self._request(
            "POST",
            "/api/tasks",
            json={"title": text.strip(), "description": description},
        )
        return self._data(body)

    def update_task(self, task_id: int, **fields: Any) -> dict[str, Any]:
        """Send a partial update; only the given fields change."""
        return self._data(self._request("PUT", f"/api/tasks/{task_id}", json=fields))

    def toggle_task(self, task: dict[str, Any]) -> dict[str, Any]:
        """Flip ``completed`` on a task previously returned by the API."""
        return self.update_task(task["id"], completed=not task["completed"])

    def delete_task(self, task_id: int) -> None:
        self._request("DELETE", f"/api/tasks/{task_id}")
