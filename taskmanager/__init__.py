"""
Task manager API application factory.

Provides the ``create_app`` factory that assembles the JSON API: it loads a
configuration class, creates the in-memory :class:`~taskmanager.store.TaskStore`
that owns all task state for this application instance, enables CORS for the
browser frontend, and registers the health, auth and task blueprints plus
the centralized JSON error handlers.

Because every call to ``create_app`` builds its own store, separate app
instances (for example one per test) never share tasks.

Key Concepts Demonstrated:
- Application factory pattern (``create_app``)
- Store lifecycle tied to the application, exposed via ``app.extensions``
- CORS configuration with ``flask_cors``
- Blueprint-based route registration
"""

from __future__ import annotations

import logging

from flask import Flask
from flask_cors import CORS

from .config import get_config
from .errors import register_error_handlers
from .request_logging import init_request_logging
from .store import TaskStore

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(config_name: str | None = None, store: TaskStore | None = None) -> Flask:
    """
    Create and configure the task manager application.

    Args:
        config_name: ``"development"``, ``"testing"`` or ``"production"``.
            When ``None`` the ``FLASK_ENV`` environment variable decides,
            defaulting to ``"development"``.
        store: Optional pre-built store to inject; a fresh empty one is
            created otherwise.

    Returns:
        A configured :class:`~flask.Flask` instance ready to serve requests.
    """
    app = Flask(__name__)
    config_class = get_config(config_name)
    app.config.from_object(config_class)

    logger.info("Creating task manager app with config: %s", config_class.__name__)
    if not app.config.get("JWT_SECRET"):
        logger.warning("JWT_SECRET is not set; logins will fail until it is configured")

    app.extensions["task_store"] = store if store is not None else TaskStore()

    origin = config_class.cors_origin()
    CORS(
        app,
        resources={r"/api/*": {"origins": origin}},
        methods=app.config["CORS_METHODS"],
        allow_headers=app.config["CORS_HEADERS"],
        supports_credentials=True,
        max_age=app.config["CORS_MAX_AGE"],
    )
    logger.info("CORS configured with origin: %s", origin)

    init_request_logging(app)

    from .routes.auth import auth_bp
    from .routes.health import health_bp
    from .routes.tasks import tasks_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(tasks_bp, url_prefix="/api/tasks")

    register_error_handlers(app)

    return app
