from typing import Any, Dict, List

from taskmanager.client.api import ApiClient

SEARCH_FIELDS = ("title", "description", "assignee")


def matches(task: Dict[str, Any], query: str) -> bool:
    needle = query.strip().lower()
    if not needle:
        return True
    return any(needle in (task.get(name) or "").lower() for name in SEARCH_FIELDS)


class TaskCache:
    """In-memory copy of the signed-in user's tasks.

    Local changes are applied only after the server has accepted them; a
    failed request raises ``ApiError`` and leaves the cache untouched.
    """

    def __init__(self, api: ApiClient):
        self.api = api
        self.tasks: List[Dict[str, Any]] = []

    def refresh(self) -> List[Dict[str, Any]]:
        if not self.api.session.is_authenticated:
            self.tasks = []
            return self.tasks
        self.tasks = list(self.api.list_tasks())
        return self.tasks

    def create(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        task = self.api.create_task(payload)
        # Server lists newest first
        self.tasks.insert(0, task)
        return task

    def update(self, task_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        task = self.api.update_task(task_id, payload)
        self.tasks = [task if t["id"] == task_id else t for t in self.tasks]
        return task

    def delete(self, task_id: str):
        self.api.delete_task(task_id)
        self.tasks = [t for t in self.tasks if t["id"] != task_id]

    def clear(self):
        self.tasks = []

    def filter(self, query: str) -> List[Dict[str, Any]]:
        return [t for t in self.tasks if matches(t, query)]
