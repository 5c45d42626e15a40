from taskmanager.services.task_service import TaskService

__all__ = ["TaskService"]
