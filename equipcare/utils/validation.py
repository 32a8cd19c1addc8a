"""Form validation helpers on top of pydantic models."""

from typing import Any, Mapping, Type, TypeVar

from pydantic import BaseModel, ValidationError

from equipcare.utils.errors import FormValidationError

FormT = TypeVar("FormT", bound=BaseModel)

_VALUE_ERROR_PREFIX = "Value error, "


def field_errors(exc: ValidationError) -> dict[str, list[str]]:
    """Group pydantic errors by top-level field, with readable messages."""
    errors: dict[str, list[str]] = {}
    for err in exc.errors():
        loc = err.get("loc") or ("form",)
        field = str(loc[0])
        message = err.get("msg", "Invalid value")
        if message.startswith(_VALUE_ERROR_PREFIX):
            message = message[len(_VALUE_ERROR_PREFIX):]
        errors.setdefault(field, []).append(message)
    return errors


def parse_form(form_cls: Type[FormT], data: Mapping[str, Any]) -> FormT:
    """
    Validate submitted form values.

    Raises FormValidationError carrying field-level messages keyed by the
    form's wire names (e.g. ``taskName``).
    """
    try:
        return form_cls.model_validate(dict(data))
    except ValidationError as e:
        raise FormValidationError(field_errors(e)) from e
