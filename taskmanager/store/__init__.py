from taskmanager.store.task_store import TaskStore

__all__ = ["TaskStore"]
