"""
In-memory task storage scoped by owner.

Defines the :class:`Task` record and the :class:`TaskStore` that owns every
task and the id counter for the lifetime of the process.  The store is
created by the application factory and reached through
``current_app.extensions["task_store"]``; nothing else holds a reference to
its internal list.

Every lookup takes the requesting username.  A task owned by somebody else
is treated exactly like a task that does not exist, so callers can never
tell the two apart.

Key Concepts Demonstrated:
- Explicitly owned store object instead of module-level globals
- Ownership scoping on every read and write
- Partial-update semantics with an ``UNSET`` sentinel
- Timezone-aware UTC timestamps serialised as ISO-8601
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any


class _Unset:
    """Marker for "field not supplied" in partial updates."""

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Task:
    """
    A single task owned by one user.

    Attributes:
        id: Sequential integer, unique for the process lifetime.
        title: Short summary of the task.
        description: Optional longer text, empty string when omitted.
        completed: Whether the task is done.
        user_id: Username of the owner.  Never changes after creation.
        created_at: Creation time (UTC).
        updated_at: Time of the last modification (UTC).
    """

    id: int
    title: str
    user_id: str
    description: str = ""
    completed: bool = False
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    @staticmethod
    def _to_utc_iso(value: datetime) -> str:
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        else:
            value = value.astimezone(timezone.utc)
        return value.isoformat()

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the camelCase shape used on the wire."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "completed": self.completed,
            "userId": self.user_id,
            "createdAt": self._to_utc_iso(self.created_at),
            "updatedAt": self._to_utc_iso(self.updated_at),
        }

    def __repr__(self) -> str:
        return f"<Task {self.id}: {self.title}>"


class TaskStore:
    """
    Owner-scoped CRUD over an in-memory list of tasks.

    All operations hold a lock for their whole duration so each one is
    atomic even under a threaded WSGI server.  Tasks handed back to callers
    are copies; mutating them has no effect on the store.
    """

    def __init__(self) -> None:
        self._tasks: list[Task] = []
        self._next_id = 1
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)

    def _find_index(self, task_id: int, username: str) -> int | None:
        for index, task in enumerate(self._tasks):
            if task.id == task_id and task.user_id == username:
                return index
        return None

    def list_by_owner(self, username: str) -> list[Task]:
        """Return the tasks owned by *username* in insertion order."""
        with self._lock:
            return [replace(task) for task in self._tasks if task.user_id == username]

    def get(self, task_id: int, username: str) -> Task | None:
        """Return the task if it exists and belongs to *username*."""
        with self._lock:
            index = self._find_index(task_id, username)
            return None if index is None else replace(self._tasks[index])

    def create(self, title: str, user_id: str, description: str = "") -> Task:
        """Store a new, not yet completed task and return it."""
        with self._lock:
            now = _utcnow()
            task = Task(
                id=self._next_id,
                title=title,
                description=description or "",
                completed=False,
                user_id=user_id,
                created_at=now,
                updated_at=now,
            )
            self._next_id += 1
            self._tasks.append(task)
            return replace(task)

    def update(
        self,
        task_id: int,
        username: str,
        *,
        title: Any = UNSET,
        description: Any = UNSET,
        completed: Any = UNSET,
    ) -> Task | None:
        """
        Apply a partial update.

        Only arguments other than ``UNSET`` are written.  ``id``,
        ``user_id`` and ``created_at`` are never touched; ``updated_at`` is
        refreshed on every successful call.

        Returns:
            The updated task, or ``None`` when the task does not exist or
            belongs to someone else.
        """
        with self._lock:
            index = self._find_index(task_id, username)
            if index is None:
                return None

            current = self._tasks[index]
            changes: dict[str, Any] = {"updated_at": _utcnow()}
            if title is not UNSET:
                changes["title"] = title
            if description is not UNSET:
                changes["description"] = description
            if completed is not UNSET:
                changes["completed"] = completed

            updated = replace(current, **changes)
            self._tasks[index] = updated
            return replace(updated)

    def delete(self, task_id: int, username: str) -> bool:
        """Remove the task; return ``True`` only if something was removed."""
        with self._lock:
            index = self._find_index(task_id, username)
            if index is None:
                return False
            del self._tasks[index]
            return True

    def clear(self) -> None:
        """Drop every task and restart ids from 1."""
        with self._lock:
            self._tasks.clear()
            self._next_id = 1
