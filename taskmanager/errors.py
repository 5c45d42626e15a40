"""Error taxonomy shared by the store, the service layer and the HTTP routes.

Every error knows the HTTP status it maps to and how to render itself as a
JSON body, so the Flask error handler in ``taskmanager.app`` stays generic.
"""

from typing import List, NamedTuple


class FieldError(NamedTuple):
    field: str
    message: str


class TaskManagerError(Exception):
    status_code = 500
    default_message = "Internal Server Error"

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    def to_dict(self):
        return {"message": self.message}


class ValidationError(TaskManagerError):
    """Malformed or missing request fields. Always caused by the client."""

    status_code = 400
    default_message = "Validation failed"

    def __init__(self, errors: List[FieldError], message=None):
        super().__init__(message)
        self.errors = list(errors)

    def to_dict(self):
        return {
            "message": self.message,
            "errors": [{"field": e.field, "message": e.message} for e in self.errors],
        }


class NotFoundError(TaskManagerError):
    """The id does not exist or belongs to another user. Callers cannot tell which."""

    status_code = 404
    default_message = "Task not found"


class AuthError(TaskManagerError):
    status_code = 401
    default_message = "Authentication required"


class ConflictError(TaskManagerError):
    status_code = 409
    default_message = "Resource already exists"


class StoreError(TaskManagerError):
    """Persistence failure. The detail stays in the server log."""

    status_code = 500

    def to_dict(self):
        return {"message": self.default_message}
