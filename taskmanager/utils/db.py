from typing import Optional

from bson import ObjectId
from bson.errors import InvalidId
from flask import current_app
from pymongo import MongoClient
from pymongo.errors import PyMongoError


def init_app(app, client: Optional[MongoClient] = None):
    """Attach a Mongo client and database to ``app.extensions``.

    Tests pass their own client (mongomock); otherwise one is built from config.
    pymongo connects lazily, so nothing here blocks on the server.
    """
    if client is None:
        client = MongoClient(
            app.config["MONGO_URI"],
            serverSelectionTimeoutMS=app.config["MONGO_SERVER_SELECTION_TIMEOUT_MS"],
        )
    app.extensions["mongo_client"] = client
    app.extensions["mongo_db"] = client[app.config["MONGO_DB_NAME"]]


def get_db():
    return current_app.extensions["mongo_db"]


def ping_db() -> bool:
    client = current_app.extensions["mongo_client"]
    try:
        client.admin.command("ping")
    except PyMongoError as exc:
        current_app.logger.warning("MongoDB ping failed: %s", exc)
        return False
    return True


def to_object_id(value) -> Optional[ObjectId]:
    """Return an ObjectId, or None when ``value`` is not a valid one."""
    if isinstance(value, ObjectId):
        return value
    # ObjectId(None) would mint a fresh id
    if not isinstance(value, str):
        return None
    try:
        return ObjectId(value)
    except InvalidId:
        return None
