from taskmanager.validation.auth_schema import validate_credentials
from taskmanager.validation.task_schema import ValidationResult, validate_create, validate_update

__all__ = ["ValidationResult", "validate_create", "validate_credentials", "validate_update"]
