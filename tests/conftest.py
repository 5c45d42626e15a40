# tests/conftest.py

from datetime import datetime, timedelta

import mongomock
import pytest
from flask_jwt_extended import create_access_token

from taskmanager.app import create_app

TEST_CONFIG = {
    "TESTING": True,
    "JWT_SECRET_KEY": "test-jwt-secret-that-is-long-enough-for-hs256",
    "MONGO_DB_NAME": "taskmanager_test",
    "PASSWORD_MIN_LENGTH": 6,
}


class FakeClock:
    """Deterministic clock: every call is one second after the previous one."""

    def __init__(self, start=datetime(2030, 1, 1, 12, 0, 0)):
        self.now = start

    def __call__(self):
        self.now += timedelta(seconds=1)
        return self.now


@pytest.fixture()
def mongo_client():
    return mongomock.MongoClient()


@pytest.fixture()
def app(mongo_client):
    return create_app(dict(TEST_CONFIG), mongo_client=mongo_client)


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def db(app, mongo_client):
    return mongo_client[app.config["MONGO_DB_NAME"]]


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def auth_headers(app):
    def make(user_id="user-a"):
        with app.app_context():
            token = create_access_token(identity=user_id)
        return {"Authorization": f"Bearer {token}"}

    return make


def task_payload(**overrides):
    payload = {
        "title": "Write report",
        "description": "Quarterly numbers",
        "dueDate": "2030-03-25T23:59:59.999Z",
        "priority": "high",
        "status": "todo",
    }
    payload.update(overrides)
    return payload
