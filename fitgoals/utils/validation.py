"""Turn pydantic validation errors into the API's ``errors`` list.

Constraints themselves live on the request models. This module only owns
the wording: ``FIELD_MESSAGES`` is an ordered table of
``(field, error types, message)`` rows, the first matching row wins, and
pydantic's own message is the fallback.
"""
from typing import Iterable

MISSING = {"missing", "string_type", "none_required"}
LENGTH = {"string_too_short", "string_too_long"}
NUMBER = {"float_parsing", "float_type", "int_parsing", "finite_number"}
DATE = {
    "datetime_parsing",
    "datetime_from_date_parsing",
    "datetime_type",
    "date_from_datetime_parsing",
}

FIELD_MESSAGES: list[tuple[str, set[str], str]] = [
    ("username", MISSING, "Username is required"),
    ("username", LENGTH, "Username must be between 3 and 25 characters"),
    ("email", MISSING, "Email is required"),
    ("email", {"value_error"}, "Invalid email address"),
    ("password", MISSING, "Password is required"),
    ("password", {"string_too_short"}, "Password must be at least 8 characters"),
    ("currentPassword", MISSING, "Current password is required"),
    ("newPassword", MISSING, "New password is required"),
    ("newPassword", {"string_too_short"}, "Password must be at least 8 characters"),
    ("name", MISSING, "Goal name is required"),
    ("name", LENGTH, "Goal name must be between 3 and 50 characters"),
    ("description", {"string_too_long"}, "Goal description cannot exceed 200 characters"),
    ("targetValue", {"missing"}, "Target value is required"),
    ("targetValue", NUMBER, "Target value must be a number"),
    ("targetValue", {"greater_than_equal"}, "Target value must be a positive number"),
    ("unit", {"missing"}, "Unit is required"),
    ("unit", {"enum", "string_type"}, "Invalid unit"),
    ("startDate", {"missing"}, "Start date is required"),
    ("startDate", DATE, "Invalid start date format"),
    ("endDate", {"missing"}, "End date is required"),
    ("endDate", DATE, "Invalid end date format"),
    ("goalId", MISSING, "Goal ID is required"),
    ("date", {"missing"}, "Date is required"),
    ("date", DATE, "Invalid date format"),
    ("value", {"missing"}, "Progress value is required"),
    ("value", NUMBER, "Progress value must be a number"),
    ("value", {"greater_than_equal"}, "Progress value must be a positive number"),
]


def _field_name(loc: tuple) -> str:
    # ("body", "targetValue") -> "targetValue"; model-level errors have no field
    parts = [str(part) for part in loc if part != "body"]
    return ".".join(parts) if parts else "body"


def _message(field: str, error: dict) -> str:
    error_type = error.get("type", "")
    for rule_field, types, message in FIELD_MESSAGES:
        if rule_field == field and error_type in types:
            return message
    if error_type == "value_error" and "error" in error.get("ctx", {}):
        return str(error["ctx"]["error"])
    return error.get("msg", "Invalid value")


def format_errors(errors: Iterable[dict]) -> list[dict]:
    """
    Convert pydantic error dicts to ``[{"field": ..., "msg": ...}]``.

    Order is preserved, so violations come back in model field order.

    Example:
        >>> format_errors([{"type": "missing", "loc": ("body", "unit"), "msg": "Field required"}])
        [{'field': 'unit', 'msg': 'Unit is required'}]
    """
    formatted = []
    for error in errors:
        field = _field_name(tuple(error.get("loc", ())))
        formatted.append({"field": field, "msg": _message(field, error)})
    return formatted
