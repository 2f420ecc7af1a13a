"""Thin ``requests`` client for the Taskdeck RPC procedures."""

import logging
from datetime import datetime
from enum import Enum
from typing import Any, List, Optional

import requests

from ..schemas.tasks import DeleteResult, TaskOut

logger = logging.getLogger(__name__)

API = "http://localhost:2022/api/v1"


class ApiError(Exception):
    def __init__(self, status_code: int, detail: str, code: Optional[str] = None):
        super().__init__(f"{status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail
        self.code = code


def _jsonable(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return value


class TaskdeckClient:
    """One method per procedure; responses come back as pydantic models.

    ``session`` may be anything with ``requests.Session``'s ``get``/``post``
    signature (a FastAPI ``TestClient`` works).
    """

    def __init__(self, base_url: str = API, session=None, timeout: float = 10):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _call(self, method: str, procedure: str, **kwargs) -> Any:
        url = f"{self.base_url}/{procedure}"
        r = getattr(self.session, method)(url, timeout=self.timeout, **kwargs)
        if r.status_code >= 400:
            try:
                body = r.json()
            except ValueError:
                body = {"detail": r.text}
            detail = body.get("detail", "")
            if not isinstance(detail, str):
                detail = str(detail)
            logger.warning("%s failed: %s %s", procedure, r.status_code, detail)
            raise ApiError(r.status_code, detail, body.get("code"))
        return r.json()

    def health(self) -> dict:
        return self._call("get", "healthcheck")

    def create_task(self, title: str, description: Optional[str] = None, priority: str = "medium",
                    category: Optional[str] = None, due_date: Optional[datetime] = None) -> TaskOut:
        payload = {
            "title": title,
            "description": description,
            "priority": _jsonable(priority),
            "category": category,
            "due_date": _jsonable(due_date),
        }
        return TaskOut.model_validate(self._call("post", "createTask", json=payload))

    def get_tasks(self, **filters) -> List[TaskOut]:
        params = {k: _jsonable(v) for k, v in filters.items() if v is not None}
        # requests would send True as "True"; FastAPI accepts both, keep it lowercase anyway
        params = {k: (str(v).lower() if isinstance(v, bool) else v) for k, v in params.items()}
        return [TaskOut.model_validate(t) for t in self._call("get", "getTasks", params=params)]

    def update_task(self, task_id: int, **changes) -> TaskOut:
        payload = {"id": task_id, **{k: _jsonable(v) for k, v in changes.items()}}
        return TaskOut.model_validate(self._call("post", "updateTask", json=payload))

    def delete_task(self, task_id: int) -> DeleteResult:
        return DeleteResult.model_validate(self._call("post", "deleteTask", json={"id": task_id}))

    def toggle_task_completion(self, task_id: int) -> TaskOut:
        return TaskOut.model_validate(self._call("post", "toggleTaskCompletion", json={"id": task_id}))

    def get_categories(self) -> List[str]:
        return self._call("get", "getCategories")
