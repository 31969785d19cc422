"""
REST API endpoints for tasks.

Every route is protected by :func:`~taskmanager.auth.require_auth` and every
store call is scoped to ``g.username``, so a user can only ever see or
change their own tasks.  A task owned by another user answers exactly like
a missing one (404).

Endpoints:
    GET    /api/tasks        - List the caller's tasks
    GET    /api/tasks/<id>   - Retrieve a single task
    POST   /api/tasks        - Create a task
    PUT    /api/tasks/<id>   - Partially update a task
    DELETE /api/tasks/<id>   - Delete a task

Key Concepts Demonstrated:
- Authentication gate, then validation, then store access
- Tenant isolation via the JWT-derived username
- Partial-update semantics (only supplied fields change)
- Uniform ``{"success": true, "data": ...}`` response envelope
"""

from __future__ import annotations

import logging

from flask import Blueprint, Response, current_app, g, jsonify

from ..auth import require_auth
from ..errors import NotFound
from ..store import UNSET, TaskStore
from ..validation import (
    get_json_object,
    parse_task_id,
    raise_for_errors,
    validate_task_create,
    validate_task_update,
)

logger = logging.getLogger(__name__)

tasks_bp = Blueprint("task_api", __name__)


def _store() -> TaskStore:
    return current_app.extensions["task_store"]


def _not_found() -> NotFound:
    return NotFound("Task not found")


@tasks_bp.route("", methods=["GET"])
@require_auth
def get_tasks() -> tuple[Response, int]:
    """List every task owned by the caller, oldest first."""
    logger.info("GET /api/tasks - Fetching tasks for user %s", g.username)
    tasks = _store().list_by_owner(g.username)
    return jsonify({"success": True, "data": [task.to_dict() for task in tasks]}), 200


@tasks_bp.route("/<task_id>", methods=["GET"])
@require_auth
def get_task(task_id: str) -> tuple[Response, int]:
    """Return one of the caller's tasks, or 404 if it is missing or foreign."""
    task = _store().get(parse_task_id(task_id), g.username)
    if task is None:
        raise _not_found()
    return jsonify({"success": True, "data": task.to_dict()}), 200


@tasks_bp.route("", methods=["POST"])
@require_auth
def create_task() -> tuple[Response, int]:
    """
    Create a task owned by the caller.

    Only ``title`` and ``description`` are read from the body; ``completed``
    always starts as ``False`` and ids, owner and timestamps are assigned
    server-side.
    """
    data = get_json_object()
    raise_for_errors(validate_task_create(data))

    task = _store().create(
        title=data["title"].strip(),
        description=(data.get("description") or "").strip(),
        user_id=g.username,
    )
    logger.info("Created task %s for user %s", task.id, g.username)
    return jsonify({"success": True, "data": task.to_dict()}), 201


@tasks_bp.route("/<task_id>", methods=["PUT"])
@require_auth
def update_task(task_id: str) -> tuple[Response, int]:
    """
    Update a task with partial semantics despite the PUT verb.

    Fields absent from the body keep their current value.  Unknown fields
    (``id``, ``userId``, timestamps) are ignored.
    """
    parsed_id = parse_task_id(task_id)
    data = get_json_object()
    raise_for_errors(validate_task_update(data))

    task = _store().update(
        parsed_id,
        g.username,
        title=data["title"].strip() if "title" in data else UNSET,
        description=data["description"].strip() if "description" in data else UNSET,
        completed=data.get("completed", UNSET),
    )
    if task is None:
        raise _not_found()
    return jsonify({"success": True, "data": task.to_dict()}), 200


@tasks_bp.route("/<task_id>", methods=["DELETE"])
@require_auth
def delete_task(task_id: str) -> tuple[Response, int]:
    """Delete one of the caller's tasks; ids are never reused afterwards."""
    parsed_id = parse_task_id(task_id)
    if not _store().delete(parsed_id, g.username):
        raise _not_found()
    logger.info("Deleted task %s for user %s", parsed_id, g.username)
    return jsonify({"success": True, "message": "Task deleted successfully"}), 200
