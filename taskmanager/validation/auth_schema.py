from pydantic import BaseModel, ConfigDict, constr, field_validator
from pydantic import ValidationError as PydanticValidationError

from taskmanager.errors import FieldError
from taskmanager.validation.task_schema import ValidationResult, field_errors


class CredentialsSchema(BaseModel):
    model_config = ConfigDict(extra="ignore")

    email: constr(strip_whitespace=True, to_lower=True, min_length=3, max_length=254)
    password: constr(min_length=1)

    @field_validator("email")
    @classmethod
    def _looks_like_email(cls, value):
        local, _, domain = value.partition("@")
        if not local or "." not in domain:
            raise ValueError("must be a valid email address")
        return value


def validate_credentials(payload, password_min_length: int = 1) -> ValidationResult:
    if not isinstance(payload, dict):
        return ValidationResult(errors=[FieldError("body", "must be a JSON object")])
    try:
        creds = CredentialsSchema.model_validate(payload)
    except PydanticValidationError as exc:
        return ValidationResult(errors=field_errors(exc))
    if len(creds.password) < password_min_length:
        return ValidationResult(
            errors=[FieldError("password", f"must be at least {password_min_length} characters")]
        )
    return ValidationResult(value=creds.model_dump())
