"""REST client for the task API."""

from typing import Any, Dict, List, Optional

import requests

from taskmanager.client.session import SessionContext


class ApiError(Exception):
    def __init__(self, status_code: int, message: str, errors: Optional[List[Dict[str, str]]] = None):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.errors = errors or []


class ApiClient:
    def __init__(
        self,
        session: SessionContext,
        base_url: str = "http://localhost:3000/api",
        timeout: float = 10,
        http: Optional[requests.Session] = None,
    ):
        self.session = session
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.http = http or requests.Session()

    def _request(self, method: str, path: str, json: Any = None) -> Any:
        headers = {"Accept": "application/json"}
        if self.session.token:
            headers["Authorization"] = f"Bearer {self.session.token}"

        resp = self.http.request(
            method,
            f"{self.base_url}{path}",
            json=json,
            headers=headers,
            timeout=self.timeout,
        )
        try:
            body = resp.json()
        except ValueError:
            body = None

        if not resp.ok:
            message = resp.reason or "Request failed"
            errors = None
            if isinstance(body, dict):
                message = body.get("message") or body.get("msg") or message
                errors = body.get("errors")
            raise ApiError(resp.status_code, message, errors)
        return body

    # Auth

    def login(self, email: str, password: str) -> Dict[str, Any]:
        data = self._request("POST", "/auth/login", {"email": email, "password": password})
        self.session.load(data["token"])
        return data

    def register(self, email: str, password: str) -> Dict[str, Any]:
        data = self._request("POST", "/auth/register", {"email": email, "password": password})
        self.session.load(data["token"])
        return data

    def logout(self):
        self.session.clear()

    # Tasks

    def list_tasks(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/tasks")

    def create_task(self, task: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/tasks", task)

    def update_task(self, task_id: str, task: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/tasks/{task_id}", task)

    def delete_task(self, task_id: str):
        self._request("DELETE", f"/tasks/{task_id}")
