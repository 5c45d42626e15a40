import logging
from typing import Any, Dict, List

from taskmanager.errors import ValidationError
from taskmanager.models.task_model import to_transfer
from taskmanager.store.task_store import TaskStore
from taskmanager.validation import validate_create, validate_update

logger = logging.getLogger(__name__)


class TaskService:
    """Task operations on behalf of one authenticated owner.

    Holds no per-request state; the owner id is passed to every call and
    forwarded to the store, which scopes each query by it.
    """

    def __init__(self, store: TaskStore):
        self.store = store

    def list(self, owner_id: str) -> List[Dict[str, Any]]:
        return [to_transfer(doc) for doc in self.store.list_by_owner(owner_id)]

    def get(self, owner_id: str, task_id: str) -> Dict[str, Any]:
        return to_transfer(self.store.get_by_id_and_owner(task_id, owner_id))

    def create(self, owner_id: str, raw) -> Dict[str, Any]:
        result = validate_create(raw)
        if not result.ok:
            raise ValidationError(result.errors)
        doc = self.store.create(result.value, owner_id)
        logger.info("Created task %s for user %s", doc["_id"], owner_id)
        return to_transfer(doc)

    def update(self, owner_id: str, task_id: str, raw) -> Dict[str, Any]:
        result = validate_update(raw)
        if not result.ok:
            raise ValidationError(result.errors)
        doc = self.store.update_by_id_and_owner(task_id, owner_id, result.value)
        logger.info("Updated task %s (%s)", task_id, ", ".join(sorted(result.value)) or "no fields")
        return to_transfer(doc)

    def delete(self, owner_id: str, task_id: str) -> Dict[str, str]:
        self.store.delete_by_id_and_owner(task_id, owner_id)
        logger.info("Deleted task %s", task_id)
        return {"message": "Task deleted"}
