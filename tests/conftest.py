"""
Shared pytest fixtures for the task manager test suite.

Provides the Flask application, test client, a clean in-memory task store,
JWT-backed request headers for two distinct users, and a Faker-driven task
factory.

Key SDET Concepts Demonstrated:
- Session-scoped app with function-scoped state reset for isolation
- Factory pattern (task_factory) for flexible test-data creation
- Two-user fixtures for tenant-isolation assertions
- Environment variable overrides set before the app is imported
"""

from __future__ import annotations

import os
from typing import Any

import pytest
from faker import Faker

os.environ["FLASK_ENV"] = "testing"
os.environ["TEST_JWT_SECRET"] = "test-jwt-secret-for-local-tests-0123456789"
os.environ["TEST_MOCK_USER"] = "admin"
os.environ["TEST_MOCK_PASSWORD"] = "changeme"

from taskmanager import create_app
from taskmanager.store import Task, TaskStore
from tests.helpers import OTHER_USERNAME, TEST_USERNAME, auth_headers, create_test_token

fake = Faker()


@pytest.fixture(scope="session")
def app():
    """
    Provide the Flask application instance for the entire test session.

    Built once with the ``testing`` config; per-test isolation comes from
    the ``task_store`` fixture clearing the store.
    """
    application = create_app("testing")
    yield application


@pytest.fixture(scope="function")
def task_store(app) -> TaskStore:
    """
    Provide the app's task store, emptied before and after each test.

    Clearing also resets the id counter, so the first task created in a
    test always gets id 1.
    """
    store: TaskStore = app.extensions["task_store"]
    store.clear()
    yield store
    store.clear()


@pytest.fixture(scope="function")
def client(app, task_store):
    """Provide a Flask test client backed by a clean store."""
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture
def test_token(app) -> str:
    """Valid token for the configured mock user."""
    return create_test_token(username=TEST_USERNAME, secret=app.config["JWT_SECRET"])


@pytest.fixture
def second_user_token(app) -> str:
    """Valid token for a different identity, used in isolation tests."""
    return create_test_token(username=OTHER_USERNAME, secret=app.config["JWT_SECRET"])


@pytest.fixture
def api_headers(test_token) -> dict[str, str]:
    return auth_headers(test_token)


@pytest.fixture
def second_user_headers(second_user_token) -> dict[str, str]:
    return auth_headers(second_user_token)


@pytest.fixture
def task_factory(task_store):
    """
    Factory fixture that inserts tasks straight into the store.

    Returns a callable ``_create_task(**kwargs)`` with Faker defaults.  Pass
    ``completed=True`` to get a task that has already been ticked off.
    """

    def _create_task(
        *,
        user_id: str = TEST_USERNAME,
        title: str | None = None,
        description: str | None = None,
        completed: bool = False,
    ) -> Task:
        task = task_store.create(
            title=title or fake.sentence(nb_words=4)[:100],
            description=description if description is not None else fake.paragraph()[:500],
            user_id=user_id,
        )
        if completed:
            task = task_store.update(task.id, user_id, completed=True)
        return task

    return _create_task


@pytest.fixture
def sample_task(task_factory) -> Task:
    """A single task with predictable values owned by the mock user."""
    return task_factory(title="Sample Task", description="This is a sample task for testing")


@pytest.fixture
def multiple_tasks(task_factory) -> list[Task]:
    """Three tasks for the mock user, one of them completed."""
    return [
        task_factory(title="Buy groceries"),
        task_factory(title="Write report", completed=True),
        task_factory(title="Call plumber"),
    ]


@pytest.fixture
def valid_task_data() -> dict[str, Any]:
    return {"title": "Test Task", "description": "This is a test task description"}


@pytest.fixture
def minimal_task_data() -> dict[str, str]:
    return {"title": "Minimal Task"}
