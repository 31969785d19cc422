"""
Route blueprints for the task manager API.

- health: liveness endpoints (``/`` and ``/api/health``)
- auth: token issuance (``/api/auth``)
- tasks: owner-scoped task CRUD (``/api/tasks``)
"""
