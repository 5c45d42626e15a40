from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from taskmanager.utils.dates import to_iso


@dataclass
class Reminder:
    date: datetime
    # {"frequency": daily | weekly | monthly | yearly, "interval": >= 1}
    recurring: Optional[Dict[str, Any]] = None
    id: Optional[str] = None

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Reminder":
        return cls(
            date=doc["date"],
            recurring=doc.get("recurring") or None,
            id=str(doc["_id"]) if doc.get("_id") is not None else None,
        )

    def to_transfer(self) -> Dict[str, Any]:
        data = {"id": self.id, "date": to_iso(self.date)}
        if self.recurring:
            data["recurring"] = {
                "frequency": self.recurring["frequency"],
                "interval": self.recurring["interval"],
            }
        return data


@dataclass
class Task:
    title: str
    due_date: Optional[datetime] = None
    description: Optional[str] = None
    priority: str = "medium"  # low | medium | high
    status: str = "todo"  # todo | in-progress | completed
    assignee: Optional[str] = None
    reminders: List[Reminder] = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    owner: Optional[str] = None
    id: Optional[str] = None

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Task":
        """Build a Task from a stored Mongo document.

        Documents written before reminders existed have no ``reminders`` key
        and read back with an empty list.
        """
        return cls(
            title=doc["title"],
            due_date=doc.get("dueDate"),
            description=doc.get("description"),
            priority=doc.get("priority") or "medium",
            status=doc.get("status") or "todo",
            assignee=doc.get("assignee"),
            reminders=[Reminder.from_document(r) for r in doc.get("reminders") or []],
            created_at=doc.get("createdAt"),
            updated_at=doc.get("updatedAt"),
            owner=doc.get("user"),
            id=str(doc["_id"]),
        )

    def to_transfer(self) -> Dict[str, Any]:
        """JSON shape sent to clients. Never includes the owner or the version counter."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "dueDate": to_iso(self.due_date),
            "priority": self.priority,
            "status": self.status,
            "assignee": self.assignee,
            "reminders": [r.to_transfer() for r in self.reminders],
            "createdAt": to_iso(self.created_at),
            "updatedAt": to_iso(self.updated_at),
        }


def to_transfer(doc: Dict[str, Any]) -> Dict[str, Any]:
    return Task.from_document(doc).to_transfer()
