from taskmanager.client.api import ApiClient, ApiError
from taskmanager.client.cache import TaskCache
from taskmanager.client.form import TaskForm
from taskmanager.client.session import SessionContext

__all__ = ["ApiClient", "ApiError", "SessionContext", "TaskCache", "TaskForm"]
