"""Validation and normalization of task request bodies.

``validate_create`` and ``validate_update`` never raise for bad input. They
return a ``ValidationResult`` holding either the normalized value (dates
already parsed, ready for the store) or the list of offending fields.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Annotated, Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, constr
from pydantic import ValidationError as PydanticValidationError
from pydantic.functional_validators import BeforeValidator

from taskmanager.errors import FieldError
from taskmanager.utils.dates import parse_iso


Priority = Literal["low", "medium", "high"]
Status = Literal["todo", "in-progress", "completed"]
Frequency = Literal["daily", "weekly", "monthly", "yearly"]

Title = constr(strip_whitespace=True, min_length=1)
Text = constr(strip_whitespace=True)
Timestamp = Annotated[datetime, BeforeValidator(parse_iso)]


@dataclass
class ValidationResult:
    value: Optional[Dict[str, Any]] = None
    errors: List[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


# Largest integer a BSON int64 can hold
MAX_INTERVAL = 2**63 - 1


class RecurringSchema(BaseModel):
    frequency: Frequency
    interval: StrictInt = Field(ge=1, le=MAX_INTERVAL)


class ReminderSchema(BaseModel):
    # Reminders echoed back from an edit form may still carry their id.
    # Only updates honor it; new tasks always get fresh reminder ids.
    id: Optional[str] = None
    date: Timestamp
    recurring: Optional[RecurringSchema] = None


def _none_to_empty(value):
    return [] if value is None else value


Reminders = Annotated[List[ReminderSchema], BeforeValidator(_none_to_empty)]


class TaskCreateSchema(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: Title
    description: Optional[Text] = None
    dueDate: Timestamp
    priority: Priority = "medium"
    status: Status = "todo"
    assignee: Optional[Text] = None
    reminders: Reminders = Field(default_factory=list)


class TaskUpdateSchema(BaseModel):
    """Partial update. Defaults are never validated, so an explicit ``null``
    is rejected for every field whose type does not allow it."""

    model_config = ConfigDict(extra="ignore")

    title: Title = None
    description: Optional[Text] = None
    dueDate: Timestamp = None
    priority: Priority = None
    status: Status = None
    assignee: Optional[Text] = None
    reminders: Reminders = None


def field_errors(exc: PydanticValidationError) -> List[FieldError]:
    errors = []
    for err in exc.errors():
        path = ".".join(str(part) for part in err["loc"]) or "body"
        message = err["msg"]
        if err["type"] == "value_error":
            message = str(err["ctx"]["error"])
        errors.append(FieldError(path, message))
    return errors


def _reminder_value(reminder: ReminderSchema, keep_id: bool) -> Dict[str, Any]:
    value = {"date": reminder.date}
    if keep_id and reminder.id:
        value["id"] = reminder.id
    if reminder.recurring is not None:
        value["recurring"] = reminder.recurring.model_dump()
    return value


def _validate(schema, payload, partial):
    if not isinstance(payload, dict):
        return ValidationResult(errors=[FieldError("body", "must be a JSON object")])
    try:
        model = schema.model_validate(payload)
    except PydanticValidationError as exc:
        return ValidationResult(errors=field_errors(exc))

    value = model.model_dump(exclude_unset=partial, exclude={"reminders"})
    if not partial or "reminders" in model.model_fields_set:
        value["reminders"] = [_reminder_value(r, keep_id=partial) for r in model.reminders]
    return ValidationResult(value=value)


def validate_create(payload) -> ValidationResult:
    return _validate(TaskCreateSchema, payload, partial=False)


def validate_update(payload) -> ValidationResult:
    return _validate(TaskUpdateSchema, payload, partial=True)
