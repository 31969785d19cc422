"""
Request validation for the auth and task endpoints.

Each validator inspects a parsed JSON body and returns a list of field
errors shaped ``{"msg", "param", "location"}``; an empty list means the
payload is acceptable.  Every failing field is reported, not just the
first one, so a client can highlight all of them at once.  Route handlers
call :func:`raise_for_errors` to turn a non-empty list into a
:class:`~taskmanager.errors.ValidationError` before any store access.
"""

from __future__ import annotations

from typing import Any

from flask import request

from .errors import ValidationError

TITLE_MIN_LENGTH = 1
TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


def _field_error(param: str, msg: str, location: str = "body") -> dict[str, str]:
    return {"msg": msg, "param": param, "location": location}


def raise_for_errors(errors: list[dict[str, str]]) -> None:
    if errors:
        raise ValidationError(validation_errors=errors)


def get_json_object() -> dict[str, Any]:
    """
    Return the request body as a dict.

    Raises:
        ValidationError: The body is missing, is not valid JSON, or is a
            JSON value other than an object.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def parse_task_id(raw_id: str) -> int:
    """
    Convert a path segment to a task id.

    Accepts an optional leading sign followed by digits, mirroring what an
    integer check on the raw string would allow.

    Raises:
        ValidationError: *raw_id* is not an integer.
    """
    candidate = raw_id.strip()
    digits = candidate[1:] if candidate[:1] in {"+", "-"} else candidate
    if not digits.isascii() or not digits.isdigit():
        raise ValidationError(
            validation_errors=[_field_error("id", "Task ID must be an integer", "params")]
        )
    return int(candidate)


def validate_login_payload(data: dict[str, Any]) -> list[dict[str, str]]:
    """Both credentials must be present as non-empty strings."""
    errors = []
    for field, label in (("username", "Username"), ("password", "Password")):
        value = data.get(field)
        if value is None or value == "":
            errors.append(_field_error(field, f"{label} is required"))
        elif not isinstance(value, str):
            errors.append(_field_error(field, f"{label} must be a string"))
    return errors


def _check_title(data: dict[str, Any], errors: list[dict[str, str]], *, required: bool) -> None:
    if "title" not in data:
        if required:
            errors.append(_field_error("title", "Title is required"))
        return

    title = data["title"]
    if not isinstance(title, str):
        errors.append(_field_error("title", "Title must be a string"))
        return

    stripped = title.strip()
    if not stripped and required:
        errors.append(_field_error("title", "Title is required"))
    elif not TITLE_MIN_LENGTH <= len(stripped) <= TITLE_MAX_LENGTH:
        errors.append(
            _field_error(
                "title",
                f"Title must be between {TITLE_MIN_LENGTH} and {TITLE_MAX_LENGTH} characters",
            )
        )


def _check_description(data: dict[str, Any], errors: list[dict[str, str]]) -> None:
    if "description" not in data:
        return
    description = data["description"]
    if not isinstance(description, str):
        errors.append(_field_error("description", "Description must be a string"))
    elif len(description.strip()) > DESCRIPTION_MAX_LENGTH:
        errors.append(
            _field_error(
                "description",
                f"Description must be at most {DESCRIPTION_MAX_LENGTH} characters",
            )
        )


def validate_task_create(data: dict[str, Any]) -> list[dict[str, str]]:
    """Rules for ``POST /api/tasks``: title required, description optional."""
    errors: list[dict[str, str]] = []
    _check_title(data, errors, required=True)
    _check_description(data, errors)
    return errors


def validate_task_update(data: dict[str, Any]) -> list[dict[str, str]]:
    """Rules for ``PUT /api/tasks/<id>``: every field optional, same bounds."""
    errors: list[dict[str, str]] = []
    _check_title(data, errors, required=False)
    _check_description(data, errors)
    # bool only; 0/1 and "true" are rejected
    if "completed" in data and not isinstance(data["completed"], bool):
        errors.append(_field_error("completed", "Completed must be a boolean"))
    return errors
