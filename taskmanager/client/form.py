from typing import Any, Dict, List, Optional

from taskmanager.client.cache import TaskCache
from taskmanager.utils.dates import end_of_day, to_iso, utcnow


class TaskForm:
    """Create/edit form state for a single task.

    Reminders are edited in place on the form; ``build_payload`` produces the
    request body in the same shape the API validates.
    """

    def __init__(self, task: Optional[Dict[str, Any]] = None):
        self.task = task
        self.reminders: List[Dict[str, Any]] = []
        if task:
            self.reminders = [
                {k: v for k, v in r.items() if k != "id"} for r in task.get("reminders") or []
            ]

    @property
    def is_edit(self) -> bool:
        return self.task is not None

    def defaults(self) -> Dict[str, Any]:
        task = self.task or {}
        due = task.get("dueDate")
        return {
            "title": task.get("title", ""),
            "description": task.get("description") or "",
            "dueDate": due[:10] if due else None,
            "priority": task.get("priority") or "medium",
            "status": task.get("status") or "todo",
            "assignee": task.get("assignee") or "",
        }

    def add_reminder(self, date: Optional[str] = None):
        self.reminders.append({"date": date or to_iso(utcnow())})

    def update_reminder(self, index: int, **updates):
        self.reminders[index] = {**self.reminders[index], **updates}

    def remove_reminder(self, index: int):
        del self.reminders[index]

    def toggle_recurring(self, index: int):
        reminder = dict(self.reminders[index])
        if reminder.pop("recurring", None) is None:
            reminder["recurring"] = {"frequency": "daily", "interval": 1}
        self.reminders[index] = reminder

    def build_payload(
        self,
        title: str,
        due_date: str,
        description: str = "",
        priority: str = "medium",
        status: str = "todo",
        assignee: Optional[str] = None,
    ) -> Dict[str, Any]:
        """``due_date`` is a ``YYYY-MM-DD`` form value; the task is due at the end of that day."""
        payload = {
            "title": title,
            "description": description,
            "dueDate": end_of_day(due_date),
            "priority": priority,
            "status": status,
            "reminders": [dict(r) for r in self.reminders],
        }
        if assignee:
            payload["assignee"] = assignee
        return payload

    def submit(self, cache: TaskCache, **values) -> Dict[str, Any]:
        payload = self.build_payload(**values)
        if self.is_edit:
            return cache.update(self.task["id"], payload)
        return cache.create(payload)
