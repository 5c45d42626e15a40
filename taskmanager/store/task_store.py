"""Owner-scoped persistence for task documents.

Every read or write filters on both ``_id`` and ``user`` in a single query,
so a task id belonging to someone else behaves exactly like a missing one.
"""

import logging
from contextlib import contextmanager
from typing import Any, Callable, Dict, List

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from taskmanager.errors import NotFoundError, StoreError
from taskmanager.utils.dates import utcnow
from taskmanager.utils.db import to_object_id

logger = logging.getLogger(__name__)

OWNER_FIELD = "user"
VERSION_FIELD = "__v"
# Never writable through an update patch
PROTECTED_FIELDS = frozenset({"_id", "id", OWNER_FIELD, "owner", "createdAt", "updatedAt", VERSION_FIELD})


@contextmanager
def _store_errors(action: str):
    try:
        yield
    except PyMongoError as exc:
        logger.exception("Task store failed to %s", action)
        raise StoreError(f"Failed to {action}") from exc


def _reminder_document(reminder: Dict[str, Any], keep_id: bool) -> Dict[str, Any]:
    reminder_id = to_object_id(reminder.get("id")) if keep_id else None
    doc = {"_id": reminder_id or ObjectId(), "date": reminder["date"]}
    if reminder.get("recurring"):
        doc["recurring"] = dict(reminder["recurring"])
    return doc


def _writable(fields: Dict[str, Any], keep_reminder_ids: bool) -> Dict[str, Any]:
    doc = {k: v for k, v in fields.items() if k not in PROTECTED_FIELDS}
    if "reminders" in doc:
        doc["reminders"] = [_reminder_document(r, keep_reminder_ids) for r in doc["reminders"] or []]
    return doc


class TaskStore:
    def __init__(self, collection: Collection, clock: Callable = utcnow):
        self.collection = collection
        self.clock = clock

    def ensure_indexes(self):
        self.collection.create_index([(OWNER_FIELD, ASCENDING), ("createdAt", DESCENDING)])

    def create(self, task: Dict[str, Any], owner_id: str) -> Dict[str, Any]:
        now = self.clock()
        doc = _writable(task, keep_reminder_ids=False)
        doc.setdefault("reminders", [])
        doc.update(
            {
                "_id": ObjectId(),
                OWNER_FIELD: owner_id,
                "createdAt": now,
                "updatedAt": now,
                VERSION_FIELD: 0,
            }
        )
        with _store_errors("create task"):
            self.collection.insert_one(doc)
        return doc

    def list_by_owner(self, owner_id: str) -> List[Dict[str, Any]]:
        with _store_errors("list tasks"):
            cursor = self.collection.find({OWNER_FIELD: owner_id}).sort(
                [("createdAt", DESCENDING), ("_id", DESCENDING)]
            )
            return list(cursor)

    def get_by_id_and_owner(self, task_id, owner_id: str) -> Dict[str, Any]:
        oid = to_object_id(task_id)
        if oid is None:
            raise NotFoundError()
        with _store_errors("fetch task"):
            doc = self.collection.find_one({"_id": oid, OWNER_FIELD: owner_id})
        if doc is None:
            raise NotFoundError()
        return doc

    def update_by_id_and_owner(self, task_id, owner_id: str, patch: Dict[str, Any]) -> Dict[str, Any]:
        oid = to_object_id(task_id)
        if oid is None:
            raise NotFoundError()
        updates = _writable(patch, keep_reminder_ids=True)
        updates["updatedAt"] = self.clock()
        with _store_errors("update task"):
            doc = self.collection.find_one_and_update(
                {"_id": oid, OWNER_FIELD: owner_id},
                {"$set": updates, "$inc": {VERSION_FIELD: 1}},
                return_document=ReturnDocument.AFTER,
            )
        if doc is None:
            raise NotFoundError()
        return doc

    def delete_by_id_and_owner(self, task_id, owner_id: str) -> None:
        oid = to_object_id(task_id)
        if oid is None:
            raise NotFoundError()
        with _store_errors("delete task"):
            res = self.collection.delete_one({"_id": oid, OWNER_FIELD: owner_id})
        if res.deleted_count == 0:
            raise NotFoundError()
