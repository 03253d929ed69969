"""
Per-job application form schema.

Every job carries eight requirement flags (``Mandatory`` / ``Optional`` / ``Off``),
one per applicant profile field. The pydantic model used to validate an
application is generated from those flags, and the same generated model backs
the form description served to the UI, so both sides agree on what is required.
"""
import re
from datetime import date
from functools import lru_cache
from typing import Annotated, Any, Literal, Mapping, Optional

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field, StringConstraints, create_model
from pydantic import ValidationError as PydanticValidationError

from ..constants import (
    EMAIL_PATTERN,
    GENDERS,
    LINKEDIN_PATTERN,
    PHONE_PATTERN,
    PROFILE_FIELDS,
    REQUIREMENT_COLUMNS,
    REQUIREMENT_LEVELS,
)
from ..utils.error_handlers import ValidationError, field_errors, get_error_message


def _check_email(value: str) -> str:
    value = value.lower()
    if not re.match(EMAIL_PATTERN, value):
        raise ValueError("Invalid email format")
    return value


def _check_phone(value: str) -> str:
    if not re.match(PHONE_PATTERN, value):
        raise ValueError("Invalid phone number")
    return value


def _check_linkedin(value: str) -> str:
    if not re.match(LINKEDIN_PATTERN, value):
        raise ValueError("LinkedIn link must look like https://linkedin.com/in/<username>")
    return value


def _check_birth_date(value: date) -> date:
    if value > date.today():
        raise ValueError("Date of birth cannot be in the future")
    return value


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _required(label: str):
    def check(value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValueError(f"{label} is required")
        return value
    return check


_Text = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]

_FIELD_TYPES = {
    "fullName": _Text,
    "photoProfile": Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=500)],
    "gender": Literal["male", "female"],
    "domicile": Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)],
    "email": Annotated[str, StringConstraints(strip_whitespace=True, max_length=255), AfterValidator(_check_email)],
    "phoneNumber": Annotated[str, StringConstraints(strip_whitespace=True, max_length=30), AfterValidator(_check_phone)],
    "linkedInLink": Annotated[
        str, StringConstraints(strip_whitespace=True, max_length=255), AfterValidator(_check_linkedin)
    ],
    "dateOfBirth": Annotated[date, AfterValidator(_check_birth_date)],
}


def normalize_requirements(raw: Mapping[str, Any] | None) -> dict[str, str]:
    """
    Map each requirement key to a known level.

    Missing, null and unrecognised values are treated as ``Off``: a field
    nobody asked for is never demanded from the applicant.
    """
    raw = raw or {}
    normalized: dict[str, str] = {}
    for key, *_ in PROFILE_FIELDS:
        value = raw.get(key)
        normalized[key] = value if isinstance(value, str) and value in REQUIREMENT_LEVELS else "Off"
    return normalized


def requirements_for_job(job: Any) -> dict[str, str]:
    return normalize_requirements(
        {key: getattr(job, column, None) for key, column in REQUIREMENT_COLUMNS.items()}
    )


def build_application_schema(requirements: Mapping[str, Any] | None) -> type[BaseModel]:
    """Return the pydantic model that validates an application for these requirement flags."""
    levels = normalize_requirements(requirements)
    return _schema_for_levels(tuple(levels[key] for key, *_ in PROFILE_FIELDS))


# Bounded by the 3**8 possible flag combinations.
@lru_cache(maxsize=None)
def _schema_for_levels(levels: tuple[str, ...]) -> type[BaseModel]:
    fields: dict[str, Any] = {}
    for (key, label, column, wire_name), level in zip(PROFILE_FIELDS, levels):
        field_type = _FIELD_TYPES[key]
        if level == "Mandatory":
            fields[column] = (
                Annotated[field_type, BeforeValidator(_required(label))],
                Field(..., alias=wire_name),
            )
        elif level == "Optional":
            fields[column] = (
                Annotated[Optional[field_type], BeforeValidator(_blank_to_none)],
                Field(default=None, alias=wire_name),
            )
    return create_model(
        "JobApplicationForm",
        __config__=ConfigDict(populate_by_name=True, extra="ignore"),
        **fields,
    )


def required_fields(schema: type[BaseModel]) -> list[str]:
    return [field.alias or name for name, field in schema.model_fields.items() if field.is_required()]


def describe_application_form(requirements: Mapping[str, Any] | None) -> list[dict]:
    levels = normalize_requirements(requirements)
    schema = build_application_schema(levels)
    required = set(required_fields(schema))
    form = []
    for key, label, _column, wire_name in PROFILE_FIELDS:
        if levels[key] == "Off":
            continue
        entry = {
            "name": wire_name,
            "requirement_key": key,
            "label": label,
            "requirement": levels[key],
            "required": wire_name in required,
        }
        if key == "gender":
            entry["options"] = list(GENDERS)
        form.append(entry)
    return form


def validate_application(requirements: Mapping[str, Any] | None, payload: Any) -> dict:
    """
    Validate a submitted application against the job's requirements.

    Returns the cleaned values keyed by application column, with ``None`` for
    fields that were optional and left blank. Fields switched off are dropped.
    Raises ``ValidationError`` carrying per-field messages keyed by wire name.
    """
    schema = build_application_schema(requirements)
    try:
        form = schema.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationError(get_error_message("validation_error"), details=field_errors(e.errors())) from None
    return form.model_dump()
